"""
数据库模型定义
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrgModule(Base):
    """
    组织模块记录

    每个 (organization_id, key) 唯一；status 用字符串存储，
    以便迁移时保留尚未建模的历史状态值
    """

    __tablename__ = "org_modules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(String(64), nullable=False, index=True)
    key = Column(String(100), nullable=False)

    # disabled / enabled_unconfigured / configured（或迁移保留的未知值）
    status = Column(String(64), nullable=False)
    version = Column(String(32), nullable=True)  # 激活时的目录版本

    # 租户配置（对本模块不透明）
    config = Column(JSON, nullable=True)
    configured_at = Column(DateTime(timezone=True), nullable=True)
    configured_by = Column(String(64), nullable=True)

    # 时间戳
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("organization_id", "key", name="uq_org_modules_org_key"),
        Index("idx_org_modules_org_status", "organization_id", "status"),
    )


class Organization(Base):
    """
    组织（租户）

    module_states / module_settings 是旧版内嵌在组织上的模块状态，
    仅作为迁移来源保留，运行期以 org_modules 为准
    """

    __tablename__ = "organizations"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=True)

    # 旧版: {module_key: "ready" | {"status": ..., "configuredAt": ...}}
    module_states = Column(JSON, nullable=True)
    # 旧版: {module_key: {...settings}}
    module_settings = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


class ModuleStateBlob(Base):
    """
    旧版通用状态存储（每个服务一条 JSON 文档）

    key 形如 "module:organizations"、"module:org_modules"
    """

    __tablename__ = "module_states"

    key = Column(String(100), primary_key=True)
    data = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
