"""Insulin on board errors.

Raised to the caller, never coerced: a dose the engine cannot place on a
decay curve is a data-entry bug, not a zero contribution.
"""


class InsulinOnBoardError(Exception):
    """Base error for IOB evaluation."""


class InvalidInsulinClass(InsulinOnBoardError, ValueError):
    """A dose's insulin class is outside the closed set."""

    def __init__(self, value: object, dose_id: str | None = None):
        self.value = value
        self.dose_id = dose_id
        where = f" on dose {dose_id}" if dose_id else ""
        super().__init__(f"Unknown insulin class {value!r}{where}")


class InvalidTimestamp(InsulinOnBoardError, ValueError):
    """An instant is missing, naive, or not a datetime."""


class InconsistentDoseDuration(InsulinOnBoardError, ValueError):
    """A dose's precomputed duration disagrees with its class."""

    def __init__(self, dose_id: str, given: float, expected: float):
        self.dose_id = dose_id
        self.given = given
        self.expected = expected
        super().__init__(
            f"Dose {dose_id} declares a {given}h duration but its class "
            f"implies {expected}h"
        )
