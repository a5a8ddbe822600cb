"""
组织模块服务

按组织（租户）管理模块的安装、卸载、套件操作与配置
"""

from bizcore.services.organization_modules.lifecycle import OrganizationModuleLifecycleService
from bizcore.services.organization_modules.schemas import (
    ConfigureResult,
    InstallResult,
    ModuleStoreItem,
    ModuleStoreView,
    OrganizationModuleRecord,
    PersistOutcome,
    SetEnabledModulesResult,
    SuiteOperationResult,
    UninstallResult,
)
from bizcore.services.organization_modules.status import normalize_module_status
from bizcore.services.organization_modules.store import OrganizationModuleStore

__all__ = [
    "ConfigureResult",
    "InstallResult",
    "ModuleStoreItem",
    "ModuleStoreView",
    "OrganizationModuleLifecycleService",
    "OrganizationModuleRecord",
    "OrganizationModuleStore",
    "PersistOutcome",
    "SetEnabledModulesResult",
    "SuiteOperationResult",
    "UninstallResult",
    "normalize_module_status",
]
