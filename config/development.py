import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Minutes after the main window start that still count as on time.
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "5"))
# "overwrite_unpaid" recomputes UNPAID salaries in place; "reject_existing" leaves any existing salary alone.
SALARY_REGENERATION_POLICY = os.getenv("SALARY_REGENERATION_POLICY", "overwrite_unpaid")
