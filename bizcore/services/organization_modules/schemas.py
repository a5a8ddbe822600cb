"""
组织模块生命周期的数据结构

记录快照、持久化结果以及各操作的结构化返回值
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any

from bizcore.core.enums import ACTIVE_MODULE_STATUSES, ModuleAction


@dataclass(frozen=True)
class OrganizationModuleRecord:
    """组织模块记录的内存快照（与 ORM 行解耦）"""

    organization_id: str
    key: str
    status: str
    config: dict[str, Any] | None = None
    version: str | None = None
    configured_at: datetime | None = None
    configured_by: str | None = None

    @property
    def is_active(self) -> bool:
        """enabled_unconfigured 或 configured 视为已安装"""
        return self.status in ACTIVE_MODULE_STATUSES

    def with_status(self, status: str, **changes: Any) -> OrganizationModuleRecord:
        return replace(self, status=status, **changes)


@dataclass(frozen=True)
class PersistOutcome:
    """持久化结果：失败不抛出，作为值返回给调用方决定是否重试"""

    ok: bool = True
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> PersistOutcome:
        return cls(ok=False, error=error)


@dataclass
class _PersistedResult:
    persisted: bool = True
    persist_error: str | None = None

    def apply_persist_outcome(self, outcome: PersistOutcome) -> None:
        self.persisted = outcome.ok
        self.persist_error = outcome.error

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class InstallResult(_PersistedResult):
    """
    安装结果

    - installed_keys: 本次新安装（依赖在前）
    - already_installed_keys: 已处于安装状态，未改动
    - skipped_system_keys: 系统/不可安装模块，隐式存在，不计入用户选择
    - missing_dependencies: 依赖了目录中不存在模块的键（降级运行）
    - errors: 按键的错误，不中断批次
    """

    installed_keys: list[str] = field(default_factory=list)
    already_installed_keys: list[str] = field(default_factory=list)
    skipped_system_keys: list[str] = field(default_factory=list)
    missing_dependencies: dict[str, list[str]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


@dataclass
class UninstallResult(_PersistedResult):
    """
    卸载结果

    blockers 为因仍有已安装模块依赖而拒绝卸载的键，blocked_by 给出具体依赖方
    """

    uninstalled_keys: list[str] = field(default_factory=list)
    already_uninstalled_keys: list[str] = field(default_factory=list)
    skipped_system_keys: list[str] = field(default_factory=list)
    blockers: list[str] = field(default_factory=list)
    blocked_by: dict[str, list[str]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


@dataclass
class SetEnabledModulesResult(_PersistedResult):
    """
    设置启用集合的结果

    请求键及其依赖闭包之外的已安装模块被停用；
    任一请求键无法识别时整个操作不做改动，只返回 errors
    """

    installed_keys: list[str] = field(default_factory=list)
    already_installed_keys: list[str] = field(default_factory=list)
    uninstalled_keys: list[str] = field(default_factory=list)
    skipped_system_keys: list[str] = field(default_factory=list)
    missing_dependencies: dict[str, list[str]] = field(default_factory=dict)
    blockers: list[str] = field(default_factory=list)
    blocked_by: dict[str, list[str]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


@dataclass
class SuiteOperationResult(_PersistedResult):
    """
    套件批量操作结果（尽力而为，不是事务）

    - installed: 状态发生变化的成员键（安装或卸载）
    - installed_dependencies: 安装时被依赖闭包带入的非成员键
    - skipped: 已处于目标状态的成员键（含系统模块成员）
    - errors: 非阻塞原因失败的条目
    - blockers: 因存在依赖方而拒绝卸载的键
    """

    suite: str = ""
    action: ModuleAction = ModuleAction.INSTALL
    installed: list[str] = field(default_factory=list)
    installed_dependencies: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    blockers: list[str] = field(default_factory=list)


@dataclass
class ConfigureResult(_PersistedResult):
    key: str = ""
    status: str = ""
    configured_at: datetime | None = None
    configured_by: str | None = None


@dataclass
class ModuleStoreItem:
    """模块商店条目（目录信息 + 组织内状态）"""

    key: str
    name: str
    version: str
    description: str | None
    dependencies: list[str]
    category: str
    suite: str
    icon: str | None
    is_system: bool
    requires_setup: bool
    installed: bool
    status: str | None = None


@dataclass
class ModuleStoreView:
    available: list[ModuleStoreItem] = field(default_factory=list)
    installed: list[ModuleStoreItem] = field(default_factory=list)
