"""
日志配置

统一使用 loguru，标准库 logging（uvicorn、sqlalchemy）通过拦截器转发
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from loguru import logger

from bizcore.config import config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_configured = False


class InterceptHandler(logging.Handler):
    """把标准库 logging 记录转发到 loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """
    初始化日志输出

    重复调用是安全的，只有第一次生效。
    """
    global _configured
    if _configured:
        return

    level = (level or config.log_level).upper()
    log_dir = config.log_dir if log_dir is None else log_dir

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, enqueue=False)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        logger.add(
            path / "bizcore_{time:YYYY-MM-DD}.log",
            level=level,
            rotation="00:00",
            retention="14 days",
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "sqlalchemy.engine"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    _configured = True


__all__ = ["logger", "setup_logging"]
