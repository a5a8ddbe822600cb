"""
功能模块目录

所有功能模块的原始配置在此汇总，启动时编译为 ModuleCatalog
"""

from typing import Any

from bizcore.modules.commerce import COMMERCE_MODULES
from bizcore.modules.communication import COMMUNICATION_MODULES
from bizcore.modules.finance import FINANCE_MODULES
from bizcore.modules.inventory import INVENTORY_MODULES
from bizcore.modules.master_data import MASTER_DATA_MODULES
from bizcore.modules.platform import PLATFORM_MODULES

# 所有模块配置（注册顺序即目录顺序）
ALL_MODULES: list[dict[str, Any]] = [
    *PLATFORM_MODULES,
    *MASTER_DATA_MODULES,
    *INVENTORY_MODULES,
    *COMMERCE_MODULES,
    *FINANCE_MODULES,
    *COMMUNICATION_MODULES,
]

__all__ = ["ALL_MODULES"]
