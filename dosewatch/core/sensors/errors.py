"""Sensor errors."""


class SensorError(Exception):
    """Base error for sensor calculations."""


class InvalidSensorTimestamp(SensorError, ValueError):
    """A sensor timestamp is naive or not a datetime."""
