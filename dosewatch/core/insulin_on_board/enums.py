"""Insulin on board enums."""

from enum import StrEnum, auto


class InsulinClass(StrEnum):
    """Pharmacokinetic class of an insulin preparation."""

    rapid = auto()
    short = auto()
    intermediate = auto()
    long = auto()
