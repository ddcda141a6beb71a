"""
Google Sheets and Google Drive access for the report job.
"""

from irb_facility_report.google_drive.auth import (
    GoogleDriveAuth,
    ServiceAccountAuth,
    create_auth_manager,
)
from irb_facility_report.google_drive.client import GoogleDriveClient
from irb_facility_report.google_drive.sheets import GoogleSheetsClient

__all__ = [
    "GoogleDriveAuth",
    "ServiceAccountAuth",
    "create_auth_manager",
    "GoogleDriveClient",
    "GoogleSheetsClient",
]
