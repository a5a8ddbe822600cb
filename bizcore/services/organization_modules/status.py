"""
模块状态规范化

把历史版本遗留的各种状态写法收敛到三态词汇：
disabled / enabled_unconfigured / configured
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bizcore.core.enums import OrganizationModuleStatus

# 历史写法 -> 规范状态（比较前已 trim + 小写）
_STATUS_ALIASES = {
    "disabled": OrganizationModuleStatus.DISABLED,
    "inactive": OrganizationModuleStatus.DISABLED,
    "configured": OrganizationModuleStatus.CONFIGURED,
    "ready": OrganizationModuleStatus.CONFIGURED,
    "enabled": OrganizationModuleStatus.ENABLED_UNCONFIGURED,
    "enabled_unconfigured": OrganizationModuleStatus.ENABLED_UNCONFIGURED,
    "pendingconfig": OrganizationModuleStatus.ENABLED_UNCONFIGURED,
    "pending_config": OrganizationModuleStatus.ENABLED_UNCONFIGURED,
}

NormalizedStatus = OrganizationModuleStatus | str


def normalize_module_status(value: Any, *, strict: bool = False) -> NormalizedStatus | None:
    """
    规范化模块状态，永不抛出异常

    Args:
        value: 字符串、带 status 字段或属性的对象（递归处理）或任意值
        strict: 为 True 时未识别的字符串返回 None（视为损坏数据）；
                默认 False，未识别的非空字符串原样保留（trim + 小写），
                以兼容尚未建模的新状态

    Returns:
        规范状态、保留的未知状态字符串，或 None（空值/无法识别的类型）
    """
    if isinstance(value, OrganizationModuleStatus):
        return value

    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return None
        status = _STATUS_ALIASES.get(normalized)
        if status is not None:
            return status
        return None if strict else normalized

    if isinstance(value, Mapping):
        return normalize_module_status(value.get("status"), strict=strict)

    # ORM 行或记录快照等带 status 属性的对象
    nested = getattr(value, "status", None)
    if nested is not None and nested is not value:
        return normalize_module_status(nested, strict=strict)

    return None


def status_value(status: NormalizedStatus) -> str:
    """转为存储用的纯字符串"""
    if isinstance(status, OrganizationModuleStatus):
        return status.value
    return status
