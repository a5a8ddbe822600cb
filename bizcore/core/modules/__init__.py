"""
模块化系统核心

提供功能模块目录与依赖管理，支持：
- 声明式模块配置，启动时编译为不可变目录
- 依赖图环检测（启动期诊断）
- 只读注册中心查询（全部 / 可安装 / 按键查找 / 套件）
"""

from bizcore.core.modules.base import ModuleDescriptor, normalize_module_key
from bizcore.core.modules.catalog import ModuleCatalog
from bizcore.core.modules.graph import CatalogValidationResult, validate_catalog
from bizcore.core.modules.registry import ModuleRegistry, build_module_registry

__all__ = [
    "ModuleDescriptor",
    "ModuleCatalog",
    "ModuleRegistry",
    "CatalogValidationResult",
    "build_module_registry",
    "normalize_module_key",
    "validate_catalog",
]
