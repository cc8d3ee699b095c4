"""Insulin on board (IOB) decay engine.

Reduces a list of insulin doses to the amount still active at an instant,
using a straight-line decay per insulin class:

- rapid: 4 hours
- short: 6 hours (configurable)
- intermediate: 12 hours
- long: 24 hours

Only bolus classes (rapid, short) count toward IOB. Intermediate and
long-acting insulin is a background rate, not something that "wears off"
in the stacking sense.

IMPORTANT: IOB here is an informational estimate. It must not be used to
calculate or automate an insulin dose.
"""

from dosewatch.core.insulin_on_board.constants import (
    BOLUS_CLASSES,
    DEFAULT_DURATION_HOURS,
)
from dosewatch.core.insulin_on_board.engine import (
    compute_iob,
    duration_for,
    project_iob_curve,
    remaining_fraction,
    require_aware,
    resolve_insulin_class,
)
from dosewatch.core.insulin_on_board.enums import InsulinClass
from dosewatch.core.insulin_on_board.errors import (
    InconsistentDoseDuration,
    InsulinOnBoardError,
    InvalidInsulinClass,
    InvalidTimestamp,
)
from dosewatch.core.insulin_on_board.models import (
    DoseContribution,
    InsulinDose,
    IOBCurvePoint,
    IOBResult,
)

__all__ = [
    "BOLUS_CLASSES",
    "DEFAULT_DURATION_HOURS",
    "DoseContribution",
    "InconsistentDoseDuration",
    "InsulinClass",
    "InsulinDose",
    "InsulinOnBoardError",
    "InvalidInsulinClass",
    "InvalidTimestamp",
    "IOBCurvePoint",
    "IOBResult",
    "compute_iob",
    "duration_for",
    "project_iob_curve",
    "remaining_fraction",
    "require_aware",
    "resolve_insulin_class",
]
