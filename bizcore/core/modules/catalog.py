"""
模块目录

启动时由配置编译一次，之后只读；作为显式构造的值传给注册中心和校验器
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from bizcore.core.exceptions import CatalogError
from bizcore.core.logger import logger
from bizcore.core.modules.base import ModuleDescriptor, compile_descriptor


class ModuleCatalog:
    """
    不可变的模块描述符集合

    - 保持注册顺序
    - 规范键唯一，重复键在构造时报错
    """

    __slots__ = ("_descriptors",)

    def __init__(self, descriptors: Iterable[ModuleDescriptor]) -> None:
        items = tuple(descriptors)
        seen: set[str] = set()
        duplicates: list[str] = []
        for descriptor in items:
            if descriptor.key in seen:
                duplicates.append(f"duplicate module key '{descriptor.key}'")
            seen.add(descriptor.key)
        if duplicates:
            raise CatalogError(duplicates)
        self._descriptors = items

    @classmethod
    def from_configs(cls, configs: Iterable[Any]) -> ModuleCatalog:
        """
        从原始配置编译目录

        所有格式错误和重复键被一次性收集后以 CatalogError 抛出，
        不会静默丢弃条目导致目录悄悄变小。
        """
        problems: list[str] = []
        descriptors: list[ModuleDescriptor] = []
        seen: set[str] = set()

        for position, raw in enumerate(configs):
            try:
                descriptor = compile_descriptor(raw, position)
            except ValueError as e:
                problems.append(str(e))
                continue
            if descriptor.key in seen:
                problems.append(f"duplicate module key '{descriptor.key}' (entry #{position})")
                continue
            seen.add(descriptor.key)
            descriptors.append(descriptor)

        if problems:
            for problem in problems:
                logger.error(f"Module catalog problem: {problem}")
            raise CatalogError(problems)

        logger.debug(f"Module catalog compiled: {len(descriptors)} modules")
        return cls(descriptors)

    def list(self) -> list[ModuleDescriptor]:
        """按注册顺序返回所有描述符（副本）"""
        return list(self._descriptors)

    def keys(self) -> list[str]:
        return [d.key for d in self._descriptors]

    def __iter__(self) -> Iterator[ModuleDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, key: object) -> bool:
        return any(d.key == key for d in self._descriptors)

    def __repr__(self) -> str:
        return f"ModuleCatalog({len(self._descriptors)} modules)"
