"""Insulin on board clinical constants.

Durations of insulin action are fixed domain policy. The short-acting
value is the one deployments most often disagree on (regular insulin is
quoted anywhere from 5 to 8 hours), so callers may override it per call
through the ``durations`` argument of the engine.
"""

from types import MappingProxyType
from typing import Final

from dosewatch.core.insulin_on_board.enums import InsulinClass

# Duration of insulin action in hours, by class.
# rapid: Humalog, Novolog, Apidra (3-4 h)
# short: Regular human insulin (5-8 h)
# intermediate: NPH (12-18 h)
# long: Lantus, Levemir, Tresiba (24 h+)
DEFAULT_DURATION_HOURS: Final = MappingProxyType(
    {
        InsulinClass.rapid: 4.0,
        InsulinClass.short: 6.0,
        InsulinClass.intermediate: 12.0,
        InsulinClass.long: 24.0,
    }
)

# Only bolus insulin "wears off" in the stacking sense. Basal insulin is a
# background rate and is excluded from IOB.
BOLUS_CLASSES: Final = frozenset({InsulinClass.rapid, InsulinClass.short})

# Alternative names seen in pump exports and manual entry.
INSULIN_CLASS_ALIASES: Final = MappingProxyType(
    {
        "fast": InsulinClass.rapid,
        "rapid-acting": InsulinClass.rapid,
        "regular": InsulinClass.short,
        "short-acting": InsulinClass.short,
        "nph": InsulinClass.intermediate,
        "basal": InsulinClass.long,
        "long-acting": InsulinClass.long,
    }
)

# Display rounding
TOTAL_IOB_DECIMALS: Final[int] = 1
DOSE_DETAIL_DECIMALS: Final[int] = 2
