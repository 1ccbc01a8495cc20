"""
Exception types raised by textslug.
"""


class TextslugError(Exception):
    """Base class for all textslug errors."""


class ConfigurationError(TextslugError, ValueError):
    """Raised when options or environment settings are malformed."""


class TableError(TextslugError):
    """Raised when a translation table cannot be loaded or extended."""
