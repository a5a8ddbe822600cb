"""
财务与报表模块
"""

ACCOUNTING_SETUP_WIZARD = {
    "steps": [
        {
            "id": "locale",
            "title": "税务配置",
            "description": "选择国家和本位币",
            "fields": [
                {
                    "key": "country",
                    "label": "国家",
                    "type": "select",
                    "required": True,
                    "dataSource": "countries",
                },
                {
                    "key": "currency",
                    "label": "币种",
                    "type": "select",
                    "required": True,
                    "dataSource": "currencies",
                },
            ],
        },
        {
            "id": "calendar",
            "title": "会计期间",
            "description": "设置财年起始月份",
            "fields": [
                {
                    "key": "fiscalYearStart",
                    "label": "起始月份",
                    "type": "select",
                    "options": [{"label": f"{m}月", "value": f"{m:02d}"} for m in range(1, 13)],
                },
            ],
        },
    ]
}

FINANCE_MODULES = [
    {
        "name": "accounting",
        "description": "科目、凭证与税务",
        "dependencies": ["currencies", "outbox"],
        "category": "finance",
        "suite": "finance-suite",
        "order": 10,
        "icon": "pi pi-book",
        "setup_wizard": ACCOUNTING_SETUP_WIZARD,
    },
    {
        "key": "reports",
        "name": "Reports",
        "description": "报表与 BI 导出",
        "dependencies": ["auth"],
        "category": "reporting",
        "suite": "finance-suite",
        "order": 20,
        "icon": "pi pi-chart-line",
    },
]
