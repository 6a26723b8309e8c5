from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timesheet_admin.timesheet_admin.database.bootstrap import apply_seed_sql, ensure_demo_admin
from src.timesheet_admin.timesheet_admin.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(db_config)

    apply_seed_sql(conn, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_admin(
        conn,
        email=getattr(settings, "DEMO_ADMIN_EMAIL", "admin@example.com"),
        fmno=getattr(settings, "DEMO_ADMIN_FMNO", "100001"),
    )

    print(f"OK: Seeded database -> {db_config.user}@{db_config.host}:{db_config.port}/{db_config.database}")


if __name__ == "__main__":
    main()
