"""Custom exceptions for configuration loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataValidationError(DataError):
    """Raised when configuration content fails structural validation."""
