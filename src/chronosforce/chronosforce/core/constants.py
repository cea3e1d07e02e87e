"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ORG_TIMEZONE = "America/New_York"
DEFAULT_ROOT_EMPLOYEE_ID = "dev-root"
DEFAULT_TICK_INTERVAL_SECONDS = 60
DEFAULT_MIN_PASSWORD_LENGTH = 6
DEFAULT_TEMPORARY_PASSWORD = "password123"
DEFAULT_REPORT_DAYS = 7
DEFAULT_DATABASE_URL = "sqlite:///chronosforce.db"
