"""
Defines custom exceptions for the application to allow for more specific error handling.

Each exception carries the process exit code the command-line layer should use
when the error ends the run.
"""

from enum import IntEnum


class ExitStatus(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    UNKNOWN_OPTION = 1
    MISSING_CONFIG = 2
    INVALID_DATE_FORMAT = 3
    INVALID_FILE_NUM = 4
    COUNTER_LOCKED = 5


class SatDownloadError(Exception):
    """Base exception for all application-specific errors."""

    exit_code = ExitStatus.UNKNOWN_OPTION


class ConfigurationError(SatDownloadError):
    """Raised for issues related to configuration loading or validation."""

    exit_code = ExitStatus.MISSING_CONFIG


class InvalidDateError(SatDownloadError):
    """Raised when the requested file date cannot be parsed."""

    exit_code = ExitStatus.INVALID_DATE_FORMAT


class InvalidFileNumberError(SatDownloadError):
    """Raised when the starting file number is not a non-negative integer."""

    exit_code = ExitStatus.INVALID_FILE_NUM


class CounterLockedError(SatDownloadError):
    """Raised when another run already holds the counter file."""

    exit_code = ExitStatus.COUNTER_LOCKED


class AuthenticationError(SatDownloadError):
    """Raised when the login request is rejected or returns no token."""


class ResolutionError(SatDownloadError):
    """Raised when a file name cannot be exchanged for a download URL."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class FileNotAvailableError(ResolutionError):
    """
    Raised when the service reports that the requested file does not exist.

    In consecutive mode this is the expected end of the sequence for a date.
    """


class TransferError(SatDownloadError):
    """Raised when streaming a resolved file to local storage fails."""


class CounterPersistenceError(SatDownloadError):
    """Raised when the counter file cannot be written."""
