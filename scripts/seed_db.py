from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from workforce_payroll.database.bootstrap import apply_seed_sql
from workforce_payroll.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    print(f"OK: Seeded database -> {DBConfig.from_mapping(db_config).describe()}")


if __name__ == "__main__":
    main()
