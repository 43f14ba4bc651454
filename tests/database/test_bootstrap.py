from pathlib import Path

from workforce_payroll.database.bootstrap import (
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_splits_into_create_table_statements():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8")))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 6
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert any("uq_salaries_employee_period" in s for s in statements)


def test_semicolons_inside_quotes_do_not_split():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]
