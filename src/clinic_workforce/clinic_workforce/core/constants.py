"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_FULL_DAY_HOURS = Decimal("8.0")
DEFAULT_HALF_DAY_HOURS = Decimal("4.0")

ALL_LOCATIONS = "ALL"
LOCUM_ID_PREFIX = "lc_"

ATTENDANCE_CSV_HEADER = ["Name", "Job Role", "Date", "Clock In", "Clock Out", "Hours Worked", "Status"]

HALF_DAY_UNITS = Decimal("0.5")
