import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Organisational time zone: shift boundaries and "today" are evaluated here
ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "America/New_York")
# Identity that sees everyone, regardless of the reporting line
ROOT_EMPLOYEE_ID = os.getenv("ROOT_EMPLOYEE_ID", "dev-root")

# SQLAlchemy URL; SQLite file next to the app by default
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chronosforce.db")
DATABASE_ECHO = bool(int(os.getenv("DATABASE_ECHO", "0")))

TICK_INTERVAL_SECONDS = int(os.getenv("TICK_INTERVAL_SECONDS", "60"))
STRICT_TRANSITIONS = bool(int(os.getenv("STRICT_TRANSITIONS", "0")))
SUPPRESS_NOOP_PROJECT_CHANGE = bool(int(os.getenv("SUPPRESS_NOOP_PROJECT_CHANGE", "0")))

ENABLE_SCHEDULER = bool(int(os.getenv("ENABLE_SCHEDULER", "1")))
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))
