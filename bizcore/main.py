"""
主应用入口
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from bizcore import __version__
from bizcore.api import catalog_router, organization_modules_router
from bizcore.config import config
from bizcore.core.exceptions import ExceptionHandlers
from bizcore.core.logger import logger, setup_logging
from bizcore.core.modules import build_module_registry
from bizcore.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """应用生命周期管理"""
    setup_logging()

    logger.info("=" * 60)
    logger.info(f"BizCore v{__version__}")
    logger.info("=" * 60)

    config.log_startup_warnings()

    logger.info("初始化数据库...")
    init_db()

    # 目录格式错误（重复键等）在这里抛出 CatalogError，阻止启动
    logger.info("构建模块注册中心...")
    app.state.module_registry = build_module_registry()

    logger.info(f"服务启动成功: http://{config.host}:{config.port}")
    logger.info("=" * 60)

    yield

    logger.info("服务已关闭")


openapi_tags = [
    {
        "name": "Modules - Catalog",
        "description": "模块目录与依赖图校验结果",
    },
    {
        "name": "Organization Modules",
        "description": "组织模块安装、卸载、套件操作与配置",
    },
]


def create_app() -> FastAPI:
    app = FastAPI(
        title="BizCore Module Registry",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    ExceptionHandlers.register(app)

    app.include_router(catalog_router)
    app.include_router(organization_modules_router)
    return app


app = create_app()


def main() -> Any:
    log_level = config.log_level.split()[0].lower()
    if log_level not in ["debug", "info", "warning", "error", "critical"]:
        log_level = "info"

    uvicorn.run(
        "bizcore.main:app",
        host=config.host,
        port=config.port,
        log_level=log_level,
        reload=config.environment == "development",
    )


if __name__ == "__main__":
    main()
