"""
Custom exceptions for the IRB facility report job.

This module defines all custom exceptions used throughout the application
for better error handling and debugging.
"""

from typing import Any, Optional


class ReportException(Exception):
    """Base exception for all report-specific errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(ReportException):
    """Configuration error."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Required configuration missing."""

    def __init__(self, config_name: str) -> None:
        """Initialize with config name."""
        message = f"Required configuration '{config_name}' is missing"
        super().__init__(message, {"config_name": config_name})


# =============================================================================
# Google Drive Exceptions
# =============================================================================


class GoogleDriveError(ReportException):
    """Base exception for Google Drive operations."""

    pass


class DriveAuthenticationError(GoogleDriveError):
    """Authentication with Google APIs failed."""

    pass


class DriveQuotaExceededError(GoogleDriveError):
    """Google API quota exceeded."""

    def __init__(self, retry_after: Optional[int] = None) -> None:
        """Initialize with retry information."""
        message = "Google API quota exceeded"
        details = {}
        if retry_after:
            message += f". Retry after {retry_after} seconds"
            details["retry_after"] = retry_after
        super().__init__(message, details)


class DriveFileNotFoundError(GoogleDriveError):
    """File or folder not found in Google Drive."""

    def __init__(self, file_id: str) -> None:
        """Initialize with file ID."""
        message = f"File with ID '{file_id}' not found in Google Drive"
        super().__init__(message, {"file_id": file_id})


# =============================================================================
# Spreadsheet Exceptions
# =============================================================================


class SpreadsheetError(ReportException):
    """Base exception for spreadsheet reads."""

    pass


class SpreadsheetNotFoundError(SpreadsheetError):
    """Spreadsheet not found or not shared with the caller."""

    def __init__(self, spreadsheet_id: str) -> None:
        """Initialize with spreadsheet ID."""
        message = f"Spreadsheet with ID '{spreadsheet_id}' not found"
        super().__init__(message, {"spreadsheet_id": spreadsheet_id})


class SheetNotFoundError(SpreadsheetError):
    """Named sheet does not exist in the spreadsheet."""

    def __init__(self, spreadsheet_id: str, sheet_name: str) -> None:
        """Initialize with spreadsheet ID and sheet name."""
        message = f"Sheet '{sheet_name}' not found in spreadsheet '{spreadsheet_id}'"
        super().__init__(message, {"spreadsheet_id": spreadsheet_id, "sheet_name": sheet_name})


# =============================================================================
# Report Exceptions
# =============================================================================


class ReportPipelineError(ReportException):
    """Base exception for report building errors."""

    pass


class ReportPublishError(ReportPipelineError):
    """Writing the report failed after prior versions were archived."""

    def __init__(self, file_name: str, archived: int, error: str) -> None:
        """Initialize with publish information."""
        message = (
            f"Failed to create '{file_name}' after archiving {archived} prior file(s): {error}"
        )
        super().__init__(message, {"file_name": file_name, "archived": archived, "error": error})
