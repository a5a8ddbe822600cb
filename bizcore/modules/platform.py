"""
平台基础模块

身份、组织结构等系统模块，始终存在，租户不可安装/卸载
"""

PLATFORM_MODULES = [
    {
        "key": "users",
        "name": "Users",
        "description": "用户资料与成员关系",
        "category": "core",
        "suite": "platform-suite",
        "order": 1,
        "icon": "pi pi-user",
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "organizations",
        "name": "Organizations",
        "description": "组织（租户）与成员管理",
        "dependencies": ["users"],
        "category": "core",
        "suite": "platform-suite",
        "order": 2,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "devices",
        "name": "Devices",
        "description": "设备接入与审计",
        "dependencies": ["users"],
        "category": "core",
        "suite": "platform-suite",
        "order": 3,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "companies",
        "name": "Companies",
        "description": "组织下的公司主体",
        "dependencies": ["users", "organizations"],
        "category": "core",
        "suite": "platform-suite",
        "order": 4,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "auth",
        "name": "Authentication",
        "description": "登录、令牌与会话",
        "dependencies": ["users", "devices", "organizations", "companies"],
        "category": "core",
        "suite": "platform-suite",
        "order": 5,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "roles",
        "name": "Roles",
        "description": "基于角色的访问控制",
        "dependencies": ["users", "organizations"],
        "category": "core",
        "suite": "platform-suite",
        "order": 6,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "permissions",
        "name": "Permissions",
        "description": "按工作区划分的细粒度权限",
        "dependencies": ["roles"],
        "category": "core",
        "suite": "platform-suite",
        "order": 7,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "countries",
        "name": "Countries",
        "description": "国家基础数据",
        "category": "core",
        "suite": "platform-suite",
        "order": 8,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "currencies",
        "name": "Currencies",
        "description": "币种与汇率基础数据",
        "dependencies": ["countries"],
        "category": "core",
        "suite": "platform-suite",
        "order": 9,
        "is_system": True,
        "is_installable": False,
    },
    {
        "key": "health",
        "name": "Health",
        "description": "健康检查与运行状态",
        "category": "utilities",
        "order": 90,
        "is_system": True,
        "is_installable": False,
    },
    # 基础设施模块：不是系统模块，但租户不能单独安装
    {
        "key": "outbox",
        "name": "Outbox",
        "description": "业务事件发件箱",
        "category": "utilities",
        "order": 91,
        "is_installable": False,
    },
    {
        "key": "branches",
        "name": "Branches",
        "description": "门店与分支机构",
        "dependencies": ["companies", "auth"],
        "category": "core",
        "order": 10,
        "icon": "pi pi-building",
    },
    {
        "key": "dashboard",
        "name": "Dashboard",
        "description": "工作区总览与关键指标",
        "dependencies": ["auth"],
        "category": "reporting",
        "order": 11,
        "icon": "pi pi-chart-bar",
    },
]
