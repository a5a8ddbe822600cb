"""
库存模块
"""

INVENTORY_MODULES = [
    {
        "key": "warehouses",
        "name": "Warehouses",
        "description": "仓库与库区",
        "dependencies": ["companies", "branches", "auth"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 10,
        "icon": "pi pi-warehouse",
    },
    {
        "key": "locations",
        "name": "Locations",
        "description": "内部库位与区域",
        "dependencies": ["auth", "warehouses"],
        "category": "inventory",
        "suite": "inventory-suite",
        "tags": ["inventory", "location"],
        "order": 20,
        "icon": "pi pi-map",
    },
    {
        "key": "stock",
        "name": "Stock",
        "description": "库存余额",
        "dependencies": ["auth", "products"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 30,
        "icon": "pi pi-database",
    },
    {
        "key": "stock-movements",
        "name": "Stock Movements",
        "description": "库存流水",
        "dependencies": ["stock", "locations", "auth"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 31,
        "icon": "pi pi-arrows-h",
    },
    {
        "key": "stock-reservations",
        "name": "Stock Reservations",
        "description": "库存预留",
        "dependencies": ["stock", "auth"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 32,
        "icon": "pi pi-lock",
    },
    {
        "key": "inventory",
        "name": "Inventory",
        "description": "库存台账与投影",
        "dependencies": ["warehouses", "stock"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 40,
        "icon": "pi pi-box",
    },
    {
        "key": "inventory-counts",
        "name": "Inventory Counts",
        "description": "实物盘点",
        "dependencies": ["inventory"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 41,
        "icon": "pi pi-list-check",
    },
    {
        "key": "inventory-adjustments",
        "name": "Inventory Adjustments",
        "description": "盘点差异调整",
        "dependencies": ["stock-movements", "inventory-counts", "auth"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 42,
        "icon": "pi pi-sliders-h",
    },
    {
        "key": "inventory-events",
        "name": "Inventory Events",
        "description": "外部事件驱动的库存变更",
        "dependencies": ["stock-movements", "outbox", "locations", "auth"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 43,
        "icon": "pi pi-bolt",
    },
    {
        "key": "transfers",
        "name": "Transfers",
        "description": "仓间调拨",
        "dependencies": ["stock-movements", "locations", "auth"],
        "category": "inventory",
        "suite": "inventory-suite",
        "order": 44,
        "icon": "pi pi-send",
    },
]
