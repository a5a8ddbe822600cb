"""
配置模块
"""

from bizcore.config.settings import Config, config

__all__ = ["Config", "config"]
