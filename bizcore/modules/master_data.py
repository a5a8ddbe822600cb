"""
主数据模块
"""

MASTER_DATA_MODULES = [
    {
        "key": "products",
        "name": "Products",
        "description": "产品与主数据",
        "category": "master-data",
        "suite": "master-data-suite",
        "tags": ["products"],
        "order": 10,
        "icon": "pi pi-box",
    },
    {
        "key": "variants",
        "name": "Variants",
        "description": "可售规格与条码",
        "dependencies": ["products"],
        "category": "catalogs",
        "suite": "master-data-suite",
        "tags": ["products", " barcode "],
        "order": 11,
        "icon": "pi pi-qrcode",
    },
    {
        "key": "uom",
        "name": "Units of Measure",
        "description": "计量单位与换算",
        "category": "catalogs",
        "suite": "master-data-suite",
        "order": 12,
        "icon": "pi pi-calculator",
    },
    {
        "key": "catalogs",
        "name": "Catalogs",
        "description": "基础目录与分类",
        "category": "catalogs",
        "suite": "master-data-suite",
        "order": 13,
        "icon": "pi pi-sitemap",
    },
    {
        "key": "price-lists",
        "name": "Price Lists",
        "description": "价格表与折扣规则",
        "dependencies": ["products"],
        "category": "catalogs",
        "suite": "master-data-suite",
        "order": 14,
        "icon": "pi pi-tags",
    },
]
