"""
模块状态迁移

一次性批处理：把历史上分散的两份模块状态合并到 org_modules：
1. 组织上内嵌的 moduleStates / moduleSettings（旧版 module:organizations 文档
   以及 organizations 表中的 JSON 列）
2. 旧版扁平的 module:org_modules 文档

状态统一规范化为三态词汇，按 (organization_id, key) 后写覆盖 upsert。
重复执行是安全的：第二次运行 upserted / modified 均为 0。
运行期间不应有针对相同组织的生命周期操作。
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from bizcore.config.constants import LegacyStateKeys
from bizcore.core.logger import logger
from bizcore.core.modules import normalize_module_key
from bizcore.models.database import ModuleStateBlob, Organization, OrgModule
from bizcore.services.organization_modules.status import normalize_module_status, status_value

_UNSET = object()


@dataclass
class UpsertStats:
    processed: int = 0
    upserted: int = 0
    modified: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"processed": self.processed, "upserted": self.upserted, "modified": self.modified}


@dataclass
class MigrationSummary:
    """每个目标表的处理统计"""

    organizations: UpsertStats = field(default_factory=UpsertStats)
    org_modules: UpsertStats = field(default_factory=UpsertStats)
    # 状态无法识别而被丢弃的条目数
    dropped: int = 0

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {
            "organizations": self.organizations.to_dict(),
            "org_modules": self.org_modules.to_dict(),
        }


@dataclass
class _OrgModuleDoc:
    organization_id: str
    key: str
    status: str
    config: Any = _UNSET
    configured_at: Any = _UNSET
    configured_by: Any = _UNSET


def _parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Ignoring unparsable timestamp {value!r}")
        return None


def _values_equal(current: Any, value: Any) -> bool:
    """比较字段值；SQLite 读回的时间不带时区，统一按 UTC 比较"""
    if isinstance(current, datetime) and isinstance(value, datetime):
        return _as_naive_utc(current) == _as_naive_utc(value)
    return current == value


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def load_legacy_state(db: Session, key: str) -> Any:
    """读取旧版 module_states 文档的 data 字段"""
    blob = db.get(ModuleStateBlob, key)
    return blob.data if blob is not None else None


def _legacy_list(state: Any, field_name: str) -> list[Any]:
    """旧文档既可能是 {field_name: [...]}，也可能直接是列表"""
    if isinstance(state, Mapping):
        value = state.get(field_name)
        return list(value) if isinstance(value, list) else []
    if isinstance(state, list):
        return list(state)
    return []


def collect_flat_org_modules(
    state: Any, *, strict: bool = False
) -> tuple[list[_OrgModuleDoc], int]:
    """从旧版扁平集合构建记录，返回 (记录, 丢弃数)"""
    docs: list[_OrgModuleDoc] = []
    dropped = 0
    for item in _legacy_list(state, "orgModules"):
        if not isinstance(item, Mapping):
            dropped += 1
            continue
        organization_id = item.get("organizationId") or item.get("organization_id")
        key = normalize_module_key(item.get("key"))
        status = normalize_module_status(item.get("status"), strict=strict)
        if not organization_id or key is None or status is None:
            dropped += 1
            continue

        doc = _OrgModuleDoc(
            organization_id=str(organization_id), key=key, status=status_value(status)
        )
        if isinstance(item.get("config"), Mapping):
            doc.config = dict(item["config"])
        docs.append(doc)
    return docs, dropped


def collect_embedded_org_modules(
    organization_id: str,
    module_states: Any,
    module_settings: Any,
    *,
    strict: bool = False,
) -> tuple[list[_OrgModuleDoc], int]:
    """从组织内嵌的 moduleStates / moduleSettings 构建记录"""
    if not isinstance(module_states, Mapping):
        return [], 0
    settings = module_settings if isinstance(module_settings, Mapping) else {}

    docs: list[_OrgModuleDoc] = []
    dropped = 0
    for raw_key, state in module_states.items():
        key = normalize_module_key(raw_key)
        status = normalize_module_status(state, strict=strict)
        if key is None or status is None:
            dropped += 1
            continue

        doc = _OrgModuleDoc(
            organization_id=organization_id, key=key, status=status_value(status)
        )
        module_config = settings.get(raw_key)
        if isinstance(module_config, Mapping) and module_config:
            doc.config = dict(module_config)
        if isinstance(state, Mapping):
            configured_at = _parse_datetime(state.get("configuredAt"))
            if configured_at is not None:
                doc.configured_at = configured_at
            if isinstance(state.get("configuredBy"), str):
                doc.configured_by = state["configuredBy"]
        docs.append(doc)
    return docs, dropped


def upsert_organizations(db: Session, organizations: Iterable[Any]) -> UpsertStats:
    """按 id upsert 旧版组织文档"""
    stats = UpsertStats()
    added: dict[str, Organization] = {}
    for item in organizations:
        if not isinstance(item, Mapping) or not item.get("id"):
            continue
        stats.processed += 1

        org_id = str(item["id"])
        values = {
            "name": item.get("name"),
            "module_states": item.get("moduleStates"),
            "module_settings": item.get("moduleSettings"),
        }
        row = added.get(org_id) or db.get(Organization, org_id)
        if row is None:
            added[org_id] = Organization(id=org_id, **values)
            db.add(added[org_id])
            stats.upserted += 1
            continue

        changed = False
        for attr, value in values.items():
            if value is not None and getattr(row, attr) != value:
                setattr(row, attr, value)
                changed = True
        if changed:
            stats.modified += 1

    db.flush()
    return stats


def upsert_org_modules(db: Session, docs: Iterable[_OrgModuleDoc]) -> UpsertStats:
    """
    按 (organization_id, key) upsert，后写覆盖

    config / configured_at / configured_by 只在文档携带时覆盖，
    没有配置的状态条目不会抹掉另一来源已有的配置。
    同一键的多条文档先在内存中合并，再与数据库比较，
    因此 upserted / modified 按键计数，重复执行时为 0。
    """
    stats = UpsertStats()
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for doc in docs:
        stats.processed += 1
        values = merged.setdefault((doc.organization_id, doc.key), {})
        values["status"] = doc.status
        for attr in ("config", "configured_at", "configured_by"):
            value = getattr(doc, attr)
            if value is not _UNSET:
                values[attr] = value

    rows: dict[tuple[str, str], OrgModule] = {}
    org_ids = {organization_id for organization_id, _ in merged}
    if org_ids:
        for row in db.query(OrgModule).filter(OrgModule.organization_id.in_(org_ids)).all():
            rows[(row.organization_id, row.key)] = row

    for (organization_id, key), values in merged.items():
        row = rows.get((organization_id, key))
        if row is None:
            db.add(OrgModule(organization_id=organization_id, key=key, **values))
            stats.upserted += 1
            continue

        changed = False
        for attr, value in values.items():
            if not _values_equal(getattr(row, attr), value):
                setattr(row, attr, value)
                changed = True
        if changed:
            stats.modified += 1

    db.flush()
    return stats


def migrate_module_states(db: Session, *, strict: bool = False) -> MigrationSummary:
    """
    执行迁移并提交

    Args:
        db: 数据库会话
        strict: 为 True 时丢弃无法识别的状态，否则原样保留

    Raises:
        SQLAlchemyError: 数据库错误（会话已回滚）
    """
    summary = MigrationSummary()
    try:
        organizations_state = load_legacy_state(db, LegacyStateKeys.ORGANIZATIONS)
        org_modules_state = load_legacy_state(db, LegacyStateKeys.ORG_MODULES)

        legacy_organizations = _legacy_list(organizations_state, "organizations")
        summary.organizations = upsert_organizations(db, legacy_organizations)

        docs, dropped = collect_flat_org_modules(org_modules_state, strict=strict)
        summary.dropped += dropped

        # 内嵌状态放在扁平集合之后处理，同一 (组织, 模块) 以内嵌状态为准
        for organization in db.query(Organization).order_by(Organization.id.asc()).all():
            embedded, dropped = collect_embedded_org_modules(
                organization.id,
                organization.module_states,
                organization.module_settings,
                strict=strict,
            )
            docs.extend(embedded)
            summary.dropped += dropped

        summary.org_modules = upsert_org_modules(db, docs)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if summary.dropped:
        logger.warning(f"Module state migration dropped {summary.dropped} unusable entries")
    logger.info(f"Module state migration completed: {summary.to_dict()}")
    return summary
