"""
Custom Exceptions - Application-specific error types
"""


class HabitTrackerException(Exception):
    """Base exception for all habittrack errors"""
    pass


class InvalidHabitDataError(HabitTrackerException):
    """Raised when habit or check-in data validation fails"""
    pass


class InvalidDateError(InvalidHabitDataError):
    """Raised when a check-in date is not a YYYY-MM-DD calendar day"""
    pass


class InvalidImportError(HabitTrackerException):
    """Raised when an import payload is malformed"""
    pass


class StorageError(HabitTrackerException):
    """Raised when reading or writing persisted state fails"""
    pass
