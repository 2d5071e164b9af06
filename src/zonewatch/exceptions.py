"""Custom exceptions for ZONEWATCH.

Every error raised by the library derives from ``ZonewatchError`` and from
``ValueError``, so callers can catch either the package base or the
builtin category.
"""


class ZonewatchError(Exception):
    """Base exception for zone classification and rule detection failures."""


class InvalidInputError(ZonewatchError, ValueError):
    """Raised when a sample is not a sequence, is empty, or has no finite values."""


class DegenerateSampleError(ZonewatchError, ValueError):
    """Raised when σ = 0 and the degenerate policy is 'raise'."""


class ConfigurationError(ZonewatchError, ValueError):
    """Raised when an explicitly supplied parameter is invalid."""
