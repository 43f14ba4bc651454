"""Generate salaries for one calendar month (e.g. from a monthly cron job).

Usage: python scripts/generate_payroll.py 2025 1 [--department 3]
"""

from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from config import get_settings_module

from workforce_payroll.common.logging_config import configure_logging
from workforce_payroll.container import PayrollSettings, build_container


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("year", type=int)
    parser.add_argument("month", type=int)
    parser.add_argument("--department", type=int, default=None)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        payroll_settings=PayrollSettings.from_settings(settings),
    )
    result = container.payroll_runner.generate_for_month(args.year, args.month, args.department)

    print(
        f"Period {result.period_start.isoformat()}..{result.period_end.isoformat()}: "
        f"created={result.created} updated={result.updated} issues={len(result.issues)}"
    )
    for issue in result.issues:
        print(f"  employee {issue.employee_id}: {issue.kind.value} - {issue.message}")
    return 1 if result.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
