"""
采购与销售模块
"""

POS_SETUP_WIZARD = {
    "steps": [
        {
            "id": "register",
            "title": "收银台与币种",
            "description": "设置默认收银台和币种",
            "fields": [
                {"key": "registerName", "label": "收银台名称", "type": "text", "required": True},
                {
                    "key": "defaultCurrency",
                    "label": "币种",
                    "type": "select",
                    "required": True,
                    "dataSource": "currencies",
                },
            ],
        },
        {
            "id": "tax",
            "title": "税率",
            "description": "设置默认税率",
            "fields": [
                {
                    "key": "defaultTaxRate",
                    "label": "默认税率",
                    "type": "select",
                    "options": [
                        {"label": f"{rate}%", "value": str(rate)} for rate in (0, 5, 10, 15, 21)
                    ],
                },
            ],
        },
    ]
}

COMMERCE_MODULES = [
    {
        "key": "providers",
        "name": "Providers",
        "description": "供应商管理",
        "category": "purchasing",
        "suite": "purchasing-suite",
        "order": 10,
        "icon": "pi pi-truck",
    },
    {
        "key": "purchases",
        "name": "Purchases",
        "description": "采购订单与收货",
        "dependencies": ["inventory", "providers"],
        "category": "purchasing",
        "suite": "purchasing-suite",
        "order": 11,
        "icon": "pi pi-briefcase",
    },
    {
        "key": "customers",
        "name": "Customers",
        "description": "客户档案与信用",
        "category": "sales",
        "suite": "sales-suite",
        "order": 10,
        "icon": "pi pi-users",
    },
    # 历史配置只声明了 name，依赖键的大小写也不统一，由目录编译统一规范化
    {
        "name": "pos",
        "description": "销售、购物车与收款",
        "dependencies": ["inventory", "Organizations", "customers"],
        "category": "sales",
        "suite": "sales-suite",
        "order": 11,
        "icon": "pi pi-shopping-cart",
        "setup_wizard": POS_SETUP_WIZARD,
    },
    {
        "key": "prepaid",
        "name": "Prepaid",
        "description": "按供应商充值的预付余额",
        "dependencies": ["pos", "providers"],
        "category": "sales",
        "suite": "sales-suite",
        "order": 12,
        "icon": "pi pi-mobile",
    },
]
