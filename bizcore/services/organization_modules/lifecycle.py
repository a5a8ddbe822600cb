"""
组织模块生命周期服务

负责按组织安装/卸载模块、套件批量操作和模块配置：
- 安装时展开传递依赖闭包（visited 防护，目录存在环也能得到有限闭包）
- 卸载时保护仍被依赖的模块
- 按键收集错误，单个键失败不影响批次中的其它键
- 幂等：重复安装不会产生重复记录，也不会把 configured 降级

并发约束：本服务不对同一组织的并发操作加锁。读取记录 -> 计算 -> 写回之间
没有互斥，调用方必须保证同一组织同一时间只有一个生命周期操作。
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from bizcore.core.enums import ModuleAction, OrganizationModuleStatus
from bizcore.core.exceptions import InvalidRequestException, NotFoundException
from bizcore.core.logger import logger
from bizcore.core.modules import ModuleDescriptor, ModuleRegistry
from bizcore.services.organization_modules.schemas import (
    ConfigureResult,
    InstallResult,
    ModuleStoreItem,
    ModuleStoreView,
    OrganizationModuleRecord,
    SetEnabledModulesResult,
    SuiteOperationResult,
    UninstallResult,
)
from bizcore.services.organization_modules.store import OrganizationModuleStore


def _append_unique(items: list[str], key: str) -> None:
    if key not in items:
        items.append(key)


class OrganizationModuleLifecycleService:
    """组织模块生命周期编排"""

    def __init__(self, registry: ModuleRegistry, store: OrganizationModuleStore) -> None:
        self._registry = registry
        self._store = store

    # ========== 查询 ==========

    def list_available(self, organization_id: str) -> list[ModuleStoreItem]:
        """可安装模块列表（按 order、key 排序），附带该组织的安装状态"""
        records = self._store.load(organization_id)
        descriptors = sorted(self._registry.installable_modules(), key=lambda d: (d.order, d.key))
        return [self._build_item(d, records.get(d.key)) for d in descriptors]

    def list_installed(self, organization_id: str) -> list[ModuleStoreItem]:
        """
        已安装模块列表（目录顺序）

        系统/不可安装模块隐式存在，总是包含在内
        """
        records = self._store.load(organization_id)
        items: list[ModuleStoreItem] = []
        for descriptor in self._registry.all_modules():
            record = records.get(descriptor.key)
            if descriptor.is_builtin or (record is not None and record.is_active):
                items.append(self._build_item(descriptor, record))
        return items

    def get_module_store(self, organization_id: str) -> ModuleStoreView:
        return ModuleStoreView(
            available=self.list_available(organization_id),
            installed=self.list_installed(organization_id),
        )

    # ========== 安装 ==========

    def install(self, organization_id: str, module_keys: Iterable[Any]) -> InstallResult:
        """
        安装模块及其传递依赖

        闭包按依赖在前的顺序处理；已安装的键只报告不改动；
        系统/不可安装的依赖隐式存在，报告在 skipped_system_keys。
        """
        result = InstallResult()
        records = self._store.load(organization_id)

        requested = self._requested_installable(module_keys, result)
        closure = self._expand_dependencies(requested, result.missing_dependencies)
        changed = self._activate_closure(organization_id, closure, records, result)

        if changed:
            result.apply_persist_outcome(self._store.save(organization_id, changed))

        logger.info(
            f"Org [{organization_id}] install: installed={result.installed_keys} "
            f"already={result.already_installed_keys} system={result.skipped_system_keys} "
            f"errors={len(result.errors)}"
        )
        return result

    def _requested_installable(
        self, module_keys: Iterable[Any], result: InstallResult | SetEnabledModulesResult
    ) -> list[str]:
        """
        筛选可由租户安装的请求键

        直接请求的系统模块报告在 skipped_system_keys；不可安装的非系统模块记为错误
        """
        requested: list[str] = []
        for key in self._resolve_keys(module_keys, result.errors):
            descriptor = self._registry.by_key()[key]
            if descriptor.is_system:
                _append_unique(result.skipped_system_keys, key)
            elif not descriptor.is_installable:
                result.errors.append(f"Module [{key}] is not installable")
            else:
                requested.append(key)
        return requested

    def _activate_closure(
        self,
        organization_id: str,
        closure: Iterable[str],
        records: dict[str, OrganizationModuleRecord],
        result: InstallResult | SetEnabledModulesResult,
    ) -> list[OrganizationModuleRecord]:
        """激活闭包中尚未安装的模块，返回需要写回的记录（records 原地更新）"""
        changed: list[OrganizationModuleRecord] = []
        for key in closure:
            descriptor = self._registry.by_key()[key]
            if descriptor.is_builtin:
                _append_unique(result.skipped_system_keys, key)
                continue

            record = records.get(key)
            if record is not None and record.is_active:
                result.already_installed_keys.append(key)
                continue

            activated = self._activate(organization_id, descriptor, record)
            records[key] = activated
            changed.append(activated)
            result.installed_keys.append(key)

        for key, missing in result.missing_dependencies.items():
            logger.warning(
                f"Org [{organization_id}] module [{key}] installed degraded: "
                f"missing dependencies {missing}"
            )
        return changed

    def _expand_dependencies(
        self, keys: Iterable[str], missing: dict[str, list[str]]
    ) -> list[str]:
        """
        计算传递依赖闭包（后序，依赖在前）

        visited 在递归前标记，环上的键只访问一次；目录中不存在的依赖跳过并记录。
        """
        by_key = self._registry.by_key()
        ordered: list[str] = []
        visited: set[str] = set()

        def visit(key: str) -> None:
            if key in visited:
                return
            visited.add(key)
            for dep in by_key[key].dependencies:
                if dep not in by_key:
                    missing.setdefault(key, []).append(dep)
                    continue
                visit(dep)
            ordered.append(key)

        for key in keys:
            visit(key)
        return ordered

    def _activate(
        self,
        organization_id: str,
        descriptor: ModuleDescriptor,
        existing: OrganizationModuleRecord | None,
    ) -> OrganizationModuleRecord:
        """
        生成激活后的记录

        无需配置的模块直接 configured；disabled 记录若保留了配置，重新安装时恢复 configured
        """
        if not descriptor.requires_setup or (existing is not None and existing.config):
            status = OrganizationModuleStatus.CONFIGURED.value
        else:
            status = OrganizationModuleStatus.ENABLED_UNCONFIGURED.value

        if existing is None:
            return OrganizationModuleRecord(
                organization_id=organization_id,
                key=descriptor.key,
                status=status,
                version=descriptor.version,
            )
        return existing.with_status(status, version=descriptor.version)

    # ========== 卸载 ==========

    def uninstall(self, organization_id: str, module_keys: Iterable[Any]) -> UninstallResult:
        """
        卸载模块（状态置为 disabled，保留配置）

        仍有其它已安装模块直接依赖的键被拒绝并报告为 blocker。
        同一批次内一起卸载的依赖方不构成阻塞，但如果依赖方自身被阻塞，
        它的依赖也随之被阻塞（迭代到不动点）。
        """
        result = UninstallResult()
        records = self._store.load(organization_id)

        installed: set[str] = {key for key, record in records.items() if record.is_active}
        installed.update(self._registry.builtin_keys())

        candidates: list[str] = []
        for key in self._resolve_keys(module_keys, result.errors):
            descriptor = self._registry.by_key()[key]
            if descriptor.is_builtin:
                _append_unique(result.skipped_system_keys, key)
            elif key not in installed:
                result.already_uninstalled_keys.append(key)
            else:
                candidates.append(key)

        changed = self._disable_unblocked(organization_id, candidates, installed, records, result)

        if changed:
            result.apply_persist_outcome(self._store.save(organization_id, changed))

        logger.info(
            f"Org [{organization_id}] uninstall: uninstalled={result.uninstalled_keys} "
            f"already={result.already_uninstalled_keys} blockers={result.blockers} "
            f"errors={len(result.errors)}"
        )
        return result

    def _disable_unblocked(
        self,
        organization_id: str,
        candidates: list[str],
        installed: set[str],
        records: dict[str, OrganizationModuleRecord],
        result: UninstallResult | SetEnabledModulesResult,
    ) -> list[OrganizationModuleRecord]:
        """
        停用候选中未被阻塞的模块，返回需要写回的记录

        候选被集合外仍安装的模块直接依赖时阻塞；被阻塞的候选继续算作已安装，
        可能进一步阻塞它的依赖，迭代到不动点。
        """
        removable = set(candidates)
        changed_flag = True
        while changed_flag:
            changed_flag = False
            for key in candidates:
                if key not in removable:
                    continue
                dependents = self._registry.dependents_of(key, installed - removable)
                if dependents:
                    removable.discard(key)
                    result.blocked_by[key] = dependents
                    changed_flag = True

        changed: list[OrganizationModuleRecord] = []
        for key in candidates:
            if key not in removable:
                result.blockers.append(key)
                continue
            record = records[key].with_status(OrganizationModuleStatus.DISABLED.value)
            records[key] = record
            changed.append(record)
            result.uninstalled_keys.append(key)

        for key in result.blockers:
            logger.info(
                f"Org [{organization_id}] module [{key}] not uninstalled: "
                f"required by {result.blocked_by[key]}"
            )
        return changed

    # ========== 启用集合 ==========

    def set_enabled_modules(
        self, organization_id: str, module_keys: Iterable[Any]
    ) -> SetEnabledModulesResult:
        """
        把组织的启用模块设置为给定键及其依赖闭包

        - 闭包内未安装的模块被激活，已安装的保持原状态（configured 不降级）
        - 闭包外的已安装模块被停用（保留配置），仍被依赖的报告为 blocker
        - 任一请求键无法识别或不可安装时不做任何改动，避免误停用模块
        """
        result = SetEnabledModulesResult()
        records = self._store.load(organization_id)

        requested = self._requested_installable(module_keys, result)
        if result.errors:
            logger.warning(
                f"Org [{organization_id}] set enabled modules rejected: {result.errors}"
            )
            return result

        closure = self._expand_dependencies(requested, result.missing_dependencies)
        changed = self._activate_closure(organization_id, closure, records, result)

        keep = set(closure)
        installed = {key for key, record in records.items() if record.is_active}
        installed.update(self._registry.builtin_keys())
        candidates = [
            d.key
            for d in self._registry.all_modules()
            if d.key in installed and d.key not in keep and not d.is_builtin
        ]
        changed.extend(
            self._disable_unblocked(organization_id, candidates, installed, records, result)
        )

        if changed:
            result.apply_persist_outcome(self._store.save(organization_id, changed))

        logger.info(
            f"Org [{organization_id}] set enabled modules: installed={result.installed_keys} "
            f"uninstalled={result.uninstalled_keys} blockers={result.blockers}"
        )
        return result

    # ========== 套件 ==========

    def install_suite(self, organization_id: str, suite: str) -> SuiteOperationResult:
        return self._run_suite(organization_id, suite, ModuleAction.INSTALL)

    def uninstall_suite(self, organization_id: str, suite: str) -> SuiteOperationResult:
        return self._run_suite(organization_id, suite, ModuleAction.UNINSTALL)

    def _run_suite(
        self, organization_id: str, suite: str, action: ModuleAction
    ) -> SuiteOperationResult:
        """
        对套件全部成员执行一次批量操作，尽力而为

        installed / skipped 只列套件成员；安装时被闭包带入的非成员依赖
        列在 installed_dependencies，隐式存在的系统依赖不出现在结果中
        """
        result = SuiteOperationResult(suite=suite, action=action)
        members = self._registry.suite_members(suite)
        if not members:
            result.errors.append(f"Unknown suite: {suite}")
            return result

        member_set = set(members)

        if action == ModuleAction.INSTALL:
            installed = self.install(organization_id, members)
            result.installed = [k for k in installed.installed_keys if k in member_set]
            result.installed_dependencies = [
                k for k in installed.installed_keys if k not in member_set
            ]
            result.skipped = [
                k
                for k in installed.already_installed_keys + installed.skipped_system_keys
                if k in member_set
            ]
            result.errors = list(installed.errors)
            result.persisted = installed.persisted
            result.persist_error = installed.persist_error
        else:
            removed = self.uninstall(organization_id, members)
            result.installed = list(removed.uninstalled_keys)
            result.skipped = removed.already_uninstalled_keys + removed.skipped_system_keys
            result.errors = list(removed.errors)
            result.blockers = list(removed.blockers)
            result.persisted = removed.persisted
            result.persist_error = removed.persist_error

        return result

    # ========== 配置 ==========

    def configure_module(
        self,
        organization_id: str,
        module_key: str,
        module_config: dict[str, Any] | None = None,
        configured_by: str | None = None,
    ) -> ConfigureResult:
        """
        保存模块配置并标记为 configured

        Raises:
            NotFoundException: 模块不存在
            InvalidRequestException: 系统模块或模块未安装
        """
        descriptor = self._registry.get(module_key)
        if descriptor is None:
            raise NotFoundException(f"模块 '{module_key}' 不存在")
        if descriptor.is_builtin:
            raise InvalidRequestException(f"系统模块 '{descriptor.key}' 不支持组织级配置")

        records = self._store.load(organization_id)
        existing = records.get(descriptor.key)
        if existing is None or not existing.is_active:
            raise InvalidRequestException(f"模块 '{descriptor.key}' 未安装")

        configured_at = datetime.now(timezone.utc)
        record = existing.with_status(
            OrganizationModuleStatus.CONFIGURED.value,
            config=dict(module_config or {}),
            configured_at=configured_at,
            configured_by=configured_by,
        )

        result = ConfigureResult(
            key=descriptor.key,
            status=record.status,
            configured_at=configured_at,
            configured_by=configured_by,
        )
        result.apply_persist_outcome(self._store.save(organization_id, [record]))
        logger.info(f"Org [{organization_id}] module [{descriptor.key}] configured")
        return result

    # ========== 内部工具 ==========

    def _resolve_keys(self, module_keys: Iterable[Any], errors: list[str]) -> list[str]:
        """规范化、去重请求的键；无法识别的键记入 errors"""
        if isinstance(module_keys, str):
            module_keys = [module_keys]
        resolved: list[str] = []
        for raw in module_keys or []:
            key = self._registry.normalize_key(raw)
            if key is None:
                errors.append(f"Invalid module key: {raw!r}")
                continue
            if key not in self._registry.by_key():
                errors.append(f"Unknown module key: {key}")
                continue
            if key not in resolved:
                resolved.append(key)
        return resolved

    @staticmethod
    def _build_item(
        descriptor: ModuleDescriptor, record: OrganizationModuleRecord | None
    ) -> ModuleStoreItem:
        if descriptor.is_builtin:
            installed = True
            status: str | None = OrganizationModuleStatus.CONFIGURED.value
        else:
            installed = record is not None and record.is_active
            status = record.status if record is not None else None

        return ModuleStoreItem(
            key=descriptor.key,
            name=descriptor.name,
            version=descriptor.version,
            description=descriptor.description,
            dependencies=list(descriptor.dependencies),
            category=descriptor.category,
            suite=descriptor.suite,
            icon=descriptor.icon,
            is_system=descriptor.is_system,
            requires_setup=descriptor.requires_setup,
            installed=installed,
            status=status,
        )
