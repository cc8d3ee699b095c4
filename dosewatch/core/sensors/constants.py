"""CGM sensor constants."""

from typing import Final

# Wear-life used when an inventory row has no known sensor model
DEFAULT_SENSOR_DURATION_DAYS: Final[int] = 10

# Expiration display bands (days left)
EXPIRING_SOON_DAYS: Final[int] = 3
CRITICAL_DAYS: Final[int] = 1

# Expiry alerts: a warning on exactly these days-left values
EXPIRY_WARNING_DAYS: Final[frozenset[int]] = frozenset({3, 1, 0})
# Dexcom sensors keep reading for this long past their rated wear-life
DEXCOM_GRACE_PERIOD_HOURS: Final[int] = 12

# Inventory
LOW_STOCK_QUANTITY: Final[int] = 2
# With more than this many days of supply, reorder on a monthly cadence
MONTHLY_REORDER_SUPPLY_DAYS: Final[int] = 30
REORDER_INTERVAL_DAYS: Final[int] = 30
# Otherwise reorder this many days before the supply runs out
REORDER_BUFFER_DAYS: Final[int] = 3
# Without order history, keep this many sensors' worth of supply in hand
REORDER_SAFETY_SENSORS: Final[int] = 2
# Remind when the reorder date is this close
REORDER_REMINDER_DAYS: Final[int] = 3

# Window used to derive the monthly usage rate
USAGE_WINDOW_MONTHS: Final[int] = 3
