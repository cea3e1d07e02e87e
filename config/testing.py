import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "America/New_York")
ROOT_EMPLOYEE_ID = "dev-root"

# Fresh in-memory database per app
DATABASE_URL = "sqlite://"
DATABASE_ECHO = False

TICK_INTERVAL_SECONDS = 60
STRICT_TRANSITIONS = False
SUPPRESS_NOOP_PROJECT_CHANGE = False

# Tests drive ticks by hand
ENABLE_SCHEDULER = False
SEED_DEMO_DATA = True
