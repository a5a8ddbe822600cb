# ==============================================================================
# 模块目录相关常量
# ==============================================================================


class ModuleDefaults:
    """模块描述符缺省值"""

    VERSION = "1.0.0"
    CATEGORY = "utilities"
    SUITE = "utilities-suite"
    # 展示/安装排序（越小越靠前）
    ORDER = 100


# 已知的模块分类，未知分类归入 ModuleDefaults.CATEGORY
MODULE_CATEGORIES = (
    "core",
    "master-data",
    "catalogs",
    "inventory",
    "purchasing",
    "sales",
    "finance",
    "communication",
    "reporting",
    "utilities",
)


# ==============================================================================
# 旧版状态存储
# ==============================================================================


class LegacyStateKeys:
    """module_states 表中历史数据使用的键"""

    ORGANIZATIONS = "module:organizations"
    ORG_MODULES = "module:org_modules"
