"""
DataSize exceptions.

All custom errors derive from ValueError, so callers that already guard conversions
with `except ValueError` keep working. Division by zero uses the builtin ZeroDivisionError.
"""


class DataSizeError(ValueError):
    """Base class for data size errors."""


class InvalidUnitError(DataSizeError):
    """A value outside the closed Unit enumeration was passed where a Unit is required."""

    def __init__(self, message: str, unit: object = None):
        super().__init__(message)
        self.unit = unit


class UnrecognizedUnitError(DataSizeError):
    """A text token matches no unit name, synonym or abbreviation."""

    def __init__(self, message: str, text: object = None):
        super().__init__(message)
        self.text = text


class DataSizeFormatError(DataSizeError):
    """Fallback formatting of a non data size value failed for the given directive."""

    def __init__(self, message: str, directive: str | None = None):
        super().__init__(message)
        self.directive = directive
