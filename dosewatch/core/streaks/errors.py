"""Streak errors."""


class StreakError(Exception):
    """Base error for streak evaluation."""


class InvalidActivityDate(StreakError, TypeError):
    """An activity date is not a plain calendar ``date``.

    Datetimes are rejected too: timezone resolution happens once, at the
    boundary, before dates reach the streak algorithm.
    """

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Expected a datetime.date, got {type(value).__name__}: {value!r}"
        )


class InvalidTimezone(StreakError, ValueError):
    """An IANA timezone name could not be resolved."""
