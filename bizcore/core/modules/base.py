"""
模块基础定义

包含模块描述符及其编译规则（键规范化、缺省值）
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bizcore.config.constants import MODULE_CATEGORIES, ModuleDefaults


def normalize_module_key(value: Any) -> str | None:
    """
    规范化模块键

    去除首尾空白并转为小写；非字符串或空字符串返回 None。
    所有调用方都经由这里得到规范键，不要在别处重复推导。
    """
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    return normalized or None


@dataclass(frozen=True)
class ModuleDescriptor:
    """
    模块描述符 - 目录中的不可变条目

    setup_wizard / settings_schema 对本模块是不透明的，只用于判断是否需要配置
    """

    # 基本信息
    key: str  # 规范键: inventory, price-lists
    name: str
    version: str = ModuleDefaults.VERSION
    description: str | None = None

    # 依赖（规范键，有序去重）
    dependencies: tuple[str, ...] = ()

    # 分类与套件
    category: str = ModuleDefaults.CATEGORY
    suite: str = ModuleDefaults.SUITE
    tags: tuple[str, ...] = ()
    order: int = ModuleDefaults.ORDER
    icon: str | None = None

    # 安装控制
    is_system: bool = False  # 系统模块：始终存在，租户不可安装/卸载
    is_installable: bool = True

    # 配置结构（不透明）
    setup_wizard: Mapping[str, Any] | None = field(default=None, compare=False)
    settings_schema: Mapping[str, Any] | None = field(default=None, compare=False)

    @property
    def requires_setup(self) -> bool:
        """是否需要租户提供配置后才能进入 configured 状态"""
        return bool(self.setup_wizard) or bool(self.settings_schema)

    @property
    def is_builtin(self) -> bool:
        """隐式存在的模块（系统模块或不可安装模块），不由租户管理"""
        return self.is_system or not self.is_installable


def _optional_field(raw: Mapping[str, Any], key: str, field_name: str, expected: type) -> Any:
    """读取可选字段；存在但类型不符时报错，不做隐式转换（"false" 不会变成 True）"""
    value = raw.get(field_name)
    if value is not None and not isinstance(value, expected):
        raise ValueError(
            f"module [{key}] field '{field_name}' must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def compile_descriptor(raw: Any, position: int) -> ModuleDescriptor:
    """
    将原始模块配置编译为描述符

    Args:
        raw: 原始配置（Mapping）
        position: 在目录中的位置，仅用于错误信息

    Raises:
        ValueError: 配置格式错误
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"entry #{position} is not a mapping ({type(raw).__name__})")

    key = normalize_module_key(raw.get("key")) or normalize_module_key(raw.get("name"))
    if key is None:
        raise ValueError(f"entry #{position} has neither 'key' nor 'name'")

    raw_dependencies = raw.get("dependencies") or []
    if isinstance(raw_dependencies, (str, bytes)) or not isinstance(
        raw_dependencies, (list, tuple)
    ):
        raise ValueError(f"module [{key}] dependencies must be a list")

    dependencies: list[str] = []
    for dep in raw_dependencies:
        dep_key = normalize_module_key(dep)
        if dep_key and dep_key not in dependencies:
            dependencies.append(dep_key)

    category = raw.get("category")
    if category not in MODULE_CATEGORIES:
        category = ModuleDefaults.CATEGORY

    suite = raw.get("suite")
    suite = suite.strip() if isinstance(suite, str) else ""

    raw_tags = raw.get("tags")
    tags = (
        tuple(t.strip() for t in raw_tags if isinstance(t, str) and t.strip())
        if isinstance(raw_tags, (list, tuple))
        else ()
    )

    order = raw.get("order")
    if not isinstance(order, int) or isinstance(order, bool):
        order = ModuleDefaults.ORDER

    is_system = _optional_field(raw, key, "is_system", bool)
    is_installable = _optional_field(raw, key, "is_installable", bool)
    version = _optional_field(raw, key, "version", str)
    description = _optional_field(raw, key, "description", str)
    icon = _optional_field(raw, key, "icon", str)
    setup_wizard = _optional_field(raw, key, "setup_wizard", Mapping)
    settings_schema = _optional_field(raw, key, "settings_schema", Mapping)

    name = raw.get("name")
    return ModuleDescriptor(
        key=key,
        name=name.strip() if isinstance(name, str) and name.strip() else key,
        version=version.strip() if version and version.strip() else ModuleDefaults.VERSION,
        description=description,
        dependencies=tuple(dependencies),
        category=category,
        suite=suite or ModuleDefaults.SUITE,
        tags=tags,
        order=order,
        icon=icon,
        is_system=bool(is_system),
        is_installable=True if is_installable is None else is_installable,
        setup_wizard=setup_wizard,
        settings_schema=settings_schema,
    )
