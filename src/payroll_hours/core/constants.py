"""Constants and defaults.

Note: Keep policy constants here to avoid magic numbers spread across code.
Every value is only a default; settings modules may override it.
"""

from decimal import Decimal

DEFAULT_EXPECTED_MONTHLY_HOURS = 176  # 22 workdays x 8h
DEFAULT_EXPECTED_DAILY_HOURS = 8
DEFAULT_TOLERANCE_MINUTES = 10
DEFAULT_BREAK_THRESHOLD_HOURS = 7
DEFAULT_BREAK_MINUTES = 60
DEFAULT_TIMEZONE = "Africa/Accra"

SSNIT_EMPLOYEE_RATE = Decimal("0.055")
SSNIT_EMPLOYER_RATE = Decimal("0.13")
SSNIT_TIER1_RATE = Decimal("0.135")
SSNIT_TIER2_RATE = Decimal("0.05")
SSNIT_CEILING = Decimal("1500")

# Ghana monthly PAYE: (band width, rate); the last band is open-ended.
PAYE_BRACKETS = (
    (Decimal("3828"), Decimal("0")),
    (Decimal("1000"), Decimal("0.05")),
    (Decimal("1000"), Decimal("0.10")),
    (Decimal("1000"), Decimal("0.175")),
    (None, Decimal("0.25")),
)

DEFAULT_ROLLING_PERIOD_DAYS = 30
