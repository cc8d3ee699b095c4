"""DoseWatch: insulin on board, risk alerts, streaks and sensor supply."""

__version__ = "0.1.0"
