"""
数据迁移
"""

from bizcore.services.migration.module_states import MigrationSummary, migrate_module_states

__all__ = ["MigrationSummary", "migrate_module_states"]
