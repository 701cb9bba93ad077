"""Custom exceptions for plancal."""


class PlancalError(Exception):
    """Base exception for all plancal errors."""

    pass


class InvalidArgumentError(PlancalError, ValueError):
    """Raised when a calendar function is called outside its contract.

    These indicate a programming error at the call site (e.g. a negative day
    count), never a condition the user can trigger from the grid.
    """

    pass


class ValidationError(PlancalError):
    """Raised when plan data fails semantic validation."""

    pass


class ParseError(PlancalError):
    """Raised when YAML parsing fails."""

    pass
