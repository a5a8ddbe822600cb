"""
模块注册中心

目录之上的只读查询视图，由调用方显式构造并传入编排服务
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from bizcore.core.logger import logger
from bizcore.core.modules.base import ModuleDescriptor, normalize_module_key
from bizcore.core.modules.catalog import ModuleCatalog
from bizcore.core.modules.graph import (
    CatalogValidationResult,
    log_validation_result,
    validate_catalog,
)


class ModuleRegistry:
    """
    模块注册中心

    职责：
    - 提供全部模块 / 可安装模块视图
    - 提供规范键到描述符的 O(1) 查找表（构造时建立一次）
    - 套件成员与反向依赖查询
    """

    def __init__(self, catalog: ModuleCatalog) -> None:
        self._catalog = catalog
        self._by_key: Mapping[str, ModuleDescriptor] = MappingProxyType(
            {d.key: d for d in catalog}
        )
        self._validation: CatalogValidationResult | None = None

    @classmethod
    def from_configs(cls, configs: Iterable[Any]) -> ModuleRegistry:
        return cls(ModuleCatalog.from_configs(configs))

    @property
    def catalog(self) -> ModuleCatalog:
        return self._catalog

    # ========== 目录查询 ==========

    def all_modules(self) -> list[ModuleDescriptor]:
        """获取所有模块（注册顺序）"""
        return self._catalog.list()

    def installable_modules(self) -> list[ModuleDescriptor]:
        """获取租户可安装的模块（排除系统模块和不可安装模块）"""
        return [d for d in self._catalog if not d.is_system and d.is_installable]

    def by_key(self) -> Mapping[str, ModuleDescriptor]:
        """规范键 -> 描述符（只读）"""
        return self._by_key

    @staticmethod
    def normalize_key(key: Any) -> str | None:
        return normalize_module_key(key)

    def get(self, key: Any) -> ModuleDescriptor | None:
        """按任意大小写/空白形式的键查找描述符"""
        normalized = normalize_module_key(key)
        if normalized is None:
            return None
        return self._by_key.get(normalized)

    def builtin_keys(self) -> list[str]:
        """隐式存在的模块键"""
        return [d.key for d in self._catalog if d.is_builtin]

    # ========== 套件 ==========

    def suites(self) -> dict[str, list[str]]:
        """套件名 -> 成员键（保持注册顺序）"""
        result: dict[str, list[str]] = {}
        for descriptor in self._catalog:
            result.setdefault(descriptor.suite, []).append(descriptor.key)
        return result

    def suite_members(self, suite: str) -> list[str]:
        if not isinstance(suite, str):
            return []
        name = suite.strip()
        return [d.key for d in self._catalog if d.suite == name]

    # ========== 依赖关系 ==========

    def dependents_of(self, key: str, installed: Iterable[str]) -> list[str]:
        """
        在给定的已安装集合中，查找直接依赖 key 的其它模块

        结果按目录顺序返回；集合中不在目录里的键没有依赖，被忽略。
        """
        installed_set = set(installed)
        return [
            d.key
            for d in self._catalog
            if d.key != key and d.key in installed_set and key in d.dependencies
        ]

    def missing_dependencies(self, key: str) -> Sequence[str]:
        descriptor = self._by_key.get(key)
        if descriptor is None:
            return ()
        return tuple(dep for dep in descriptor.dependencies if dep not in self._by_key)

    # ========== 校验 ==========

    def validate(self) -> CatalogValidationResult:
        """校验依赖图（结果缓存，目录不可变）"""
        if self._validation is None:
            self._validation = validate_catalog(self._catalog)
        return self._validation


def build_module_registry(configs: Iterable[Any] | None = None) -> ModuleRegistry:
    """
    构建注册中心并输出启动期诊断

    Args:
        configs: 原始模块配置，缺省使用 bizcore.modules.ALL_MODULES

    Raises:
        CatalogError: 目录存在重复键或格式错误的条目
    """
    if configs is None:
        from bizcore.modules import ALL_MODULES

        configs = ALL_MODULES

    registry = ModuleRegistry.from_configs(configs)
    log_validation_result(registry.validate())
    logger.info(
        f"Module registry ready: {len(registry.all_modules())} modules, "
        f"{len(registry.installable_modules())} installable, "
        f"{len(registry.suites())} suites"
    )
    return registry
