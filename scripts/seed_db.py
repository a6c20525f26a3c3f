from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_portal.hr_portal.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    print(f"Seeded departments, holidays and announcements into {db_config.get('database')}")
    print("Demo accounts:")
    for full_name, email, password, role, dept, _ in DEMO_USERS:
        print(f"  {email:<22} {password:<12} {role:<6} {dept} ({full_name})")


if __name__ == "__main__":
    main()
