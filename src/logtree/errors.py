"""Exceptions raised by logtree on API misuse.

Logging itself never raises for a record below the threshold; these are
contract violations reported to the caller at the point of misuse.
"""


class LogtreeError(Exception):
    """Base class for logtree errors."""


class InvalidLoggerNameError(LogtreeError, ValueError):
    """A logger name is malformed (e.g. starts with the '.' separator)."""


class UnsupportedOperationError(LogtreeError, RuntimeError):
    """A level change is not allowed in the current mode or tree position."""
