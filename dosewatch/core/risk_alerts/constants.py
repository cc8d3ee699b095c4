"""Risk classification thresholds.

Fixed bands, not user settings. A caller that wants personalised
thresholds adjusts its inputs; the classifier stays deterministic.
"""

from typing import Final

# IOB bands (units). Mutually exclusive: high wins over moderate.
HIGH_IOB_UNITS: Final[float] = 5.0
MODERATE_IOB_UNITS: Final[float] = 3.0

# Stacking: this many bolus doses inside the window
STACKING_DOSE_COUNT: Final[int] = 3
STACKING_WINDOW_HOURS: Final[float] = 2.0

# ADA level 1 hypoglycemia threshold (mg/dL)
HYPOGLYCEMIA_THRESHOLD_MGDL: Final[int] = 70
