"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_LATE_GRACE_MINUTES = 5

# Hour buckets and money amounts are stored with two decimals.
HOURS_QUANTUM = Decimal("0.01")
MONEY_QUANTUM = Decimal("0.01")

SECONDS_PER_HOUR = 3600

REGENERATION_OVERWRITE_UNPAID = "overwrite_unpaid"
REGENERATION_REJECT_EXISTING = "reject_existing"
