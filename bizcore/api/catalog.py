"""模块目录 API 端点"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from bizcore.api.dependencies import get_module_registry
from bizcore.core.modules import ModuleDescriptor, ModuleRegistry

router = APIRouter(prefix="/api/modules", tags=["Modules - Catalog"])


class ModuleDescriptorResponse(BaseModel):
    """目录条目响应"""

    key: str
    name: str
    version: str
    description: str | None
    dependencies: list[str]
    category: str
    suite: str
    tags: list[str]
    order: int
    icon: str | None
    is_system: bool
    is_installable: bool
    requires_setup: bool

    @classmethod
    def from_descriptor(cls, descriptor: ModuleDescriptor) -> "ModuleDescriptorResponse":
        return cls(
            key=descriptor.key,
            name=descriptor.name,
            version=descriptor.version,
            description=descriptor.description,
            dependencies=list(descriptor.dependencies),
            category=descriptor.category,
            suite=descriptor.suite,
            tags=list(descriptor.tags),
            order=descriptor.order,
            icon=descriptor.icon,
            is_system=descriptor.is_system,
            is_installable=descriptor.is_installable,
            requires_setup=descriptor.requires_setup,
        )


@router.get("/catalog")
async def get_module_catalog(
    registry: ModuleRegistry = Depends(get_module_registry),
) -> dict[str, Any]:
    """
    获取模块目录

    **返回字段**:
    - `modules`: 全部模块（注册顺序）
    - `suites`: 套件名到成员键的映射
    - `validation`: 依赖图校验结果（环与悬空依赖）
    """
    return {
        "modules": [
            ModuleDescriptorResponse.from_descriptor(d).model_dump()
            for d in registry.all_modules()
        ],
        "suites": registry.suites(),
        "validation": registry.validate().to_dict(),
    }
