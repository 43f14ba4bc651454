from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from workforce_payroll.database.bootstrap import apply_schema, list_tables
from workforce_payroll.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {DBConfig.from_mapping(db_config).describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
