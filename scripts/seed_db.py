from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_system.employee_system.database.bootstrap import apply_seed_sql, ensure_bootstrap_super_admin
from src.employee_system.employee_system.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    parser = argparse.ArgumentParser(description="Seed demo data and bootstrap the first super admin.")
    parser.add_argument("--email", default=getattr(settings, "BOOTSTRAP_SUPER_ADMIN_EMAIL", ""))
    parser.add_argument("--name", default=getattr(settings, "BOOTSTRAP_SUPER_ADMIN_NAME", "Super Administrator"))
    parser.add_argument("--skip-demo", action="store_true", help="only bootstrap the super admin")
    args = parser.parse_args()

    if not args.skip_demo:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    employee_id = ensure_bootstrap_super_admin(db_config, email=args.email, full_name=args.name)
    target = DBConfig.from_mapping(db_config).describe()
    if employee_id is None:
        print(f"OK: Seeded {target} (super admin already present or not configured)")
    else:
        print(f"OK: Seeded {target} (super admin employee_id={employee_id})")


if __name__ == "__main__":
    main()
