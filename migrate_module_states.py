#!/usr/bin/env python
"""
合并历史模块状态到 org_modules 表

用法:
    python migrate_module_states.py [--database-url URL] [--strict]
"""

import argparse
import sys

from bizcore.config import config
from bizcore.core.logger import logger, setup_logging
from bizcore.database import create_session, init_db, reset_engine
from bizcore.services.migration import migrate_module_states


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Merge legacy module states into org_modules")
    parser.add_argument("--database-url", help="覆盖 DATABASE_URL")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=config.module_status_strict,
        help="丢弃无法识别的模块状态（默认原样保留）",
    )
    args = parser.parse_args(argv)

    setup_logging()
    if args.database_url:
        config.database_url = args.database_url
        reset_engine()

    db = None
    try:
        init_db()
        db = create_session()
        summary = migrate_module_states(db, strict=args.strict)
    except Exception:
        logger.exception("模块状态迁移失败")
        return 1
    finally:
        if db is not None:
            db.close()

    print("\n模块状态迁移完成：\n")
    print(f"{'target':<16}{'processed':>12}{'upserted':>12}{'modified':>12}")
    for target, stats in summary.to_dict().items():
        print(
            f"{target:<16}{stats['processed']:>12}{stats['upserted']:>12}{stats['modified']:>12}"
        )
    if summary.dropped:
        print(f"\n丢弃的条目: {summary.dropped}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
