"""路由共享的依赖项"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from bizcore.core.modules import ModuleRegistry
from bizcore.database import get_db
from bizcore.services.organization_modules import (
    OrganizationModuleLifecycleService,
    OrganizationModuleStore,
)


def get_module_registry(request: Request) -> ModuleRegistry:
    """启动时构建的注册中心，挂在 app.state 上"""
    return request.app.state.module_registry


def get_lifecycle_service(
    registry: ModuleRegistry = Depends(get_module_registry),
    db: Session = Depends(get_db),
) -> OrganizationModuleLifecycleService:
    return OrganizationModuleLifecycleService(registry, OrganizationModuleStore(db))
