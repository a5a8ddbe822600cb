"""
数据库引擎与会话

引擎在首次使用时按 config.database_url 创建；测试与迁移脚本可以先修改
config.database_url 再调用 reset_engine()
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bizcore.config import config
from bizcore.core.logger import logger

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=config.db_echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,
        echo=config.db_echo,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        pool_pre_ping=True,
    )


def get_engine() -> Engine:
    """获取（必要时创建）全局引擎"""
    global _engine, _SessionLocal
    if _engine is None:
        _engine = _create_engine(config.database_url)
        _SessionLocal = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
        logger.debug(f"Database engine created ({_engine.dialect.name})")
    return _engine


def reset_engine() -> None:
    """释放当前引擎（配置变更后调用）"""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def create_session() -> Session:
    """创建一个新的数据库会话，调用方负责关闭"""
    get_engine()
    assert _SessionLocal is not None
    return _SessionLocal()


def get_db() -> Generator[Session, None, None]:
    """FastAPI 依赖：每个请求一个会话"""
    db = create_session()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """创建缺失的数据表"""
    from bizcore.models.database import Base

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
