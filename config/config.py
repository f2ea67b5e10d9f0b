import os


class Config:
    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "payroll_db")

    # Pay policy; confirm values with payroll before changing them
    EXPECTED_MONTHLY_HOURS = os.environ.get("EXPECTED_MONTHLY_HOURS", "176")
    EXPECTED_DAILY_HOURS = os.environ.get("EXPECTED_DAILY_HOURS", "8")
    TOLERANCE_MINUTES = os.environ.get("TOLERANCE_MINUTES", "10")
    BREAK_THRESHOLD_HOURS = os.environ.get("BREAK_THRESHOLD_HOURS", "7")
    BREAK_MINUTES = os.environ.get("BREAK_MINUTES", "60")
    EMPLOYER_TIMEZONE = os.environ.get("EMPLOYER_TIMEZONE", "Africa/Accra")
    OVERTIME_POLICY = os.environ.get("OVERTIME_POLICY", "clamp")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

PAY_POLICY = {
    "expected_monthly_hours": Config.EXPECTED_MONTHLY_HOURS,
    "expected_daily_hours": Config.EXPECTED_DAILY_HOURS,
    "tolerance_minutes": Config.TOLERANCE_MINUTES,
    "break_threshold_hours": Config.BREAK_THRESHOLD_HOURS,
    "break_minutes_if_unsplit": Config.BREAK_MINUTES,
    "timezone": Config.EMPLOYER_TIMEZONE,
    "overtime": Config.OVERTIME_POLICY,
}

# Empty means the statutory defaults in payroll_hours.core.constants.
STATUTORY = {}

AUTO_INIT_DB = Config.AUTO_INIT_DB
