"""共享测试夹具：内存 SQLite 会话与小型模块目录"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bizcore.core.modules import ModuleRegistry
from bizcore.models.database import Base
from bizcore.services.organization_modules import (
    OrganizationModuleLifecycleService,
    OrganizationModuleStore,
)

SMALL_CATALOG = [
    {"key": "auth", "name": "Auth", "is_system": True},
    {"key": "outbox", "name": "Outbox", "is_installable": False},
    {"key": "inventory", "name": "Inventory", "dependencies": ["auth"], "suite": "ops", "order": 2},
    {
        "name": "POS",
        "dependencies": ["Inventory"],
        "suite": "sales",
        "order": 1,
        "setup_wizard": {"steps": [{"id": "register"}]},
    },
    {"key": "reports", "name": "Reports", "dependencies": ["auth", "outbox"], "suite": "ops"},
    {"key": "purchases", "name": "Purchases", "dependencies": ["inventory"], "suite": "ops"},
]


@pytest.fixture
def db_session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def registry() -> ModuleRegistry:
    return ModuleRegistry.from_configs(SMALL_CATALOG)


@pytest.fixture
def store(db_session: Session) -> OrganizationModuleStore:
    return OrganizationModuleStore(db_session, strict_status=False)


@pytest.fixture
def service(
    registry: ModuleRegistry, store: OrganizationModuleStore
) -> OrganizationModuleLifecycleService:
    return OrganizationModuleLifecycleService(registry, store)
