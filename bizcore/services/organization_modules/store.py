"""
组织模块存储

读取/写入某个组织的模块记录集合。读取失败直接抛出（无法在未知状态上计算），
写入失败回滚并作为 PersistOutcome 返回，由调用方决定是否重试。
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bizcore.config import config
from bizcore.core.enums import OrganizationModuleStatus
from bizcore.core.logger import logger
from bizcore.models.database import OrgModule
from bizcore.services.organization_modules.schemas import (
    OrganizationModuleRecord,
    PersistOutcome,
)
from bizcore.services.organization_modules.status import (
    normalize_module_status,
    status_value,
)


class OrganizationModuleStore:
    """基于 SQLAlchemy 的组织模块记录存储"""

    def __init__(self, db: Session, *, strict_status: bool | None = None) -> None:
        self.db = db
        self._strict_status = (
            config.module_status_strict if strict_status is None else strict_status
        )

    def load(self, organization_id: str) -> dict[str, OrganizationModuleRecord]:
        """
        读取组织的全部模块记录

        状态在读取时规范化（旧数据中的 "ready"、"enabled" 等），
        无法识别的状态按配置保留或视为 disabled。
        """
        rows = (
            self.db.query(OrgModule)
            .filter(OrgModule.organization_id == organization_id)
            .order_by(OrgModule.id.asc())
            .all()
        )

        records: dict[str, OrganizationModuleRecord] = {}
        for row in rows:
            status = normalize_module_status(row.status, strict=self._strict_status)
            if status is None:
                logger.warning(
                    f"Org [{organization_id}] module [{row.key}] has unusable status "
                    f"{row.status!r}, treating as disabled"
                )
                status = OrganizationModuleStatus.DISABLED
            records[row.key] = OrganizationModuleRecord(
                organization_id=row.organization_id,
                key=row.key,
                status=status_value(status),
                config=row.config,
                version=row.version,
                configured_at=row.configured_at,
                configured_by=row.configured_by,
            )
        return records

    def save(
        self, organization_id: str, records: Iterable[OrganizationModuleRecord]
    ) -> PersistOutcome:
        """按 (organization_id, key) upsert 记录"""
        pending = [r for r in records if r.organization_id == organization_id]
        if not pending:
            return PersistOutcome()

        keys = [r.key for r in pending]
        try:
            existing = {
                row.key: row
                for row in self.db.query(OrgModule)
                .filter(
                    OrgModule.organization_id == organization_id,
                    OrgModule.key.in_(keys),
                )
                .all()
            }

            for record in pending:
                row = existing.get(record.key)
                if row is None:
                    row = OrgModule(organization_id=organization_id, key=record.key)
                    self.db.add(row)
                    existing[record.key] = row
                row.status = record.status
                row.config = record.config
                row.version = record.version
                row.configured_at = record.configured_at
                row.configured_by = record.configured_by

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Failed to persist modules {keys} for org [{organization_id}]: {e}"
            )
            return PersistOutcome.failure(str(e))

        logger.debug(f"Persisted {len(pending)} module record(s) for org [{organization_id}]")
        return PersistOutcome()
