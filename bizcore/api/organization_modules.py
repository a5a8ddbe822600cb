"""组织模块 API 端点"""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from bizcore.api.dependencies import get_lifecycle_service
from bizcore.services.organization_modules import OrganizationModuleLifecycleService

router = APIRouter(
    prefix="/api/organizations/{organization_id}/modules",
    tags=["Organization Modules"],
)


# ========== Request Models ==========


class ModuleKeysRequest(BaseModel):
    """安装/卸载请求"""

    keys: list[str] = Field(default_factory=list)


class ConfigureModuleRequest(BaseModel):
    """模块配置请求"""

    config: dict[str, Any] = Field(default_factory=dict)
    configured_by: str | None = None


# ========== API Endpoints ==========


@router.get("")
async def get_module_store(
    organization_id: str,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """
    获取模块商店视图

    **返回字段**:
    - `available`: 可安装模块及其安装状态
    - `installed`: 已安装模块（含系统模块）
    """
    return asdict(service.get_module_store(organization_id))


@router.get("/available")
async def list_available_modules(
    organization_id: str,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> list[dict[str, Any]]:
    """获取可安装模块列表（按 order、key 排序）"""
    return [asdict(item) for item in service.list_available(organization_id)]


@router.get("/installed")
async def list_installed_modules(
    organization_id: str,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> list[dict[str, Any]]:
    """获取已安装模块列表"""
    return [asdict(item) for item in service.list_installed(organization_id)]


@router.put("")
async def set_enabled_modules(
    organization_id: str,
    payload: ModuleKeysRequest,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """
    设置组织启用的模块集合

    请求键及其依赖闭包之外的已安装模块被停用（保留配置）；
    任一键无法识别时不做改动，错误在 `errors` 中返回。

    **返回字段**:
    - `installed_keys` / `uninstalled_keys`: 本次状态发生变化的键
    - `blockers` / `blocked_by`: 仍被依赖而未停用的键
    - `persisted` / `persist_error`: 写入结果
    """
    return service.set_enabled_modules(organization_id, payload.keys).to_dict()


@router.post("/install")
async def install_modules(
    organization_id: str,
    payload: ModuleKeysRequest,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """
    安装模块及其传递依赖

    单个键的失败不会中断批次，错误在 `errors` 中按键返回；
    写入失败时 `persisted` 为 false。
    """
    return service.install(organization_id, payload.keys).to_dict()


@router.post("/uninstall")
async def uninstall_modules(
    organization_id: str,
    payload: ModuleKeysRequest,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """
    卸载模块

    仍被其它已安装模块依赖的键不会卸载，在 `blockers` / `blocked_by` 中返回
    """
    return service.uninstall(organization_id, payload.keys).to_dict()


@router.post("/suites/{suite}/install")
async def install_suite(
    organization_id: str,
    suite: str,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """安装套件的全部成员（尽力而为）"""
    return service.install_suite(organization_id, suite).to_dict()


@router.post("/suites/{suite}/uninstall")
async def uninstall_suite(
    organization_id: str,
    suite: str,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """卸载套件的全部成员（尽力而为）"""
    return service.uninstall_suite(organization_id, suite).to_dict()


@router.put("/{module_key}/config")
async def configure_module(
    organization_id: str,
    module_key: str,
    payload: ConfigureModuleRequest,
    service: OrganizationModuleLifecycleService = Depends(get_lifecycle_service),
) -> dict[str, Any]:
    """
    保存模块配置

    模块必须已安装且不是系统模块；成功后状态为 configured
    """
    result = service.configure_module(
        organization_id,
        module_key,
        module_config=payload.config,
        configured_by=payload.configured_by,
    )
    return result.to_dict()
