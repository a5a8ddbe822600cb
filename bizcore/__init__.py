"""
bizcore - 组织模块注册与生命周期管理
"""

__version__ = "0.1.0"
