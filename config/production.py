import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "America/New_York")
ROOT_EMPLOYEE_ID = os.getenv("ROOT_EMPLOYEE_ID", "dev-root")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chronosforce.db")
DATABASE_ECHO = False

TICK_INTERVAL_SECONDS = int(os.getenv("TICK_INTERVAL_SECONDS", "60"))
STRICT_TRANSITIONS = bool(int(os.getenv("STRICT_TRANSITIONS", "0")))
SUPPRESS_NOOP_PROJECT_CHANGE = bool(int(os.getenv("SUPPRESS_NOOP_PROJECT_CHANGE", "0")))

ENABLE_SCHEDULER = bool(int(os.getenv("ENABLE_SCHEDULER", "1")))
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "0")))
