"""
数据库会话管理
"""

from bizcore.database.database import (
    create_session,
    get_db,
    get_engine,
    init_db,
    reset_engine,
)

__all__ = ["create_session", "get_db", "get_engine", "init_db", "reset_engine"]
