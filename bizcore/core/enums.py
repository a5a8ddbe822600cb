"""
统一的枚举定义
避免重复定义造成的不一致
"""

from enum import Enum


class OrganizationModuleStatus(str, Enum):
    """组织模块生命周期状态（严格有序：disabled -> enabled_unconfigured -> configured）"""

    DISABLED = "disabled"
    ENABLED_UNCONFIGURED = "enabled_unconfigured"
    CONFIGURED = "configured"


# 视为"已安装"的状态
ACTIVE_MODULE_STATUSES = frozenset(
    {
        OrganizationModuleStatus.ENABLED_UNCONFIGURED.value,
        OrganizationModuleStatus.CONFIGURED.value,
    }
)


class ModuleAction(str, Enum):
    """套件批量操作类型"""

    INSTALL = "install"
    UNINSTALL = "uninstall"
