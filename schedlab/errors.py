"""Exceptions raised by the scheduling algorithms and their input layer."""


class SchedulingError(Exception):
    """Base class for all schedlab errors."""


class InvalidInput(SchedulingError, ValueError):
    """Dataset or instance file content that cannot be scheduled."""


class InvalidConfiguration(SchedulingError, ValueError):
    """Algorithm parameters or run configuration out of their valid range."""


class Intractable(SchedulingError):
    """Exact algorithm refused because the instance exceeds its size bound."""
