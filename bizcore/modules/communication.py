"""
沟通协作模块
"""

COMMUNICATION_MODULES = [
    {
        "key": "realtime",
        "name": "Realtime",
        "description": "实时通知",
        "dependencies": ["auth"],
        "category": "communication",
        "suite": "communication-suite",
        "order": 10,
        "icon": "pi pi-bell",
    },
    {
        "key": "chat",
        "name": "Chat",
        "description": "内部消息",
        "dependencies": ["auth", "realtime"],
        "category": "communication",
        "suite": "communication-suite",
        "order": 11,
        "icon": "pi pi-comments",
    },
]
