"""
Google Sheets API client.

Reads whole sheets as rows of display strings, the way they appear in the
spreadsheet UI.
"""

from typing import List, Optional

from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from irb_facility_report.google_drive.auth import AuthManager, create_auth_manager
from irb_facility_report.sources.base import Row, TableSource
from irb_facility_report.utils.errors import (
    DriveQuotaExceededError,
    SheetNotFoundError,
    SpreadsheetError,
    SpreadsheetNotFoundError,
)
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)


def quote_sheet_name(sheet_name: str) -> str:
    """A1 range covering a whole sheet, e.g. 'My Sheet'."""
    return "'" + sheet_name.replace("'", "''") + "'"


class GoogleSheetsClient(TableSource):
    """Client for reading spreadsheet tabs."""

    def __init__(
        self,
        auth_manager: Optional[AuthManager] = None,
        service: Optional[Resource] = None,
    ) -> None:
        self.auth_manager = auth_manager
        self._service: Optional[Resource] = service

    def connect(self) -> None:
        if self._service:
            return

        if self.auth_manager is None:
            self.auth_manager = create_auth_manager()
        if not self.auth_manager.is_authenticated:
            self.auth_manager.authenticate()

        try:
            self._service = build(
                "sheets",
                "v4",
                credentials=self.auth_manager.credentials,
                cache_discovery=False,
            )
            logger.info("Connected to Google Sheets API")
        except Exception as e:
            logger.error(f"Failed to build Sheets service: {e}")
            raise SpreadsheetError(f"Failed to connect to Sheets API: {str(e)}")

    @property
    def service(self) -> Resource:
        if not self._service:
            self.connect()
        return self._service

    def _raise_for(self, error: HttpError, spreadsheet_id: str) -> None:
        status = getattr(error.resp, "status", None)
        if status == 404:
            raise SpreadsheetNotFoundError(spreadsheet_id)
        if status == 429:
            raise DriveQuotaExceededError()
        raise SpreadsheetError(
            f"Failed to read spreadsheet: {str(error)}",
            {"spreadsheet_id": spreadsheet_id, "status": status},
        )

    def list_sheet_names(self, spreadsheet_id: str) -> List[str]:
        """
        Titles of all sheets in the spreadsheet.

        Raises:
            SpreadsheetNotFoundError: If the spreadsheet does not exist
        """
        request = self.service.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            fields="sheets.properties.title",
        )
        try:
            metadata = request.execute()
        except HttpError as e:
            self._raise_for(e, spreadsheet_id)
        except Exception as e:
            raise SpreadsheetError(
                f"Failed to read spreadsheet: {str(e)}",
                {"spreadsheet_id": spreadsheet_id, "error_type": type(e).__name__},
            ) from e

        return [sheet["properties"]["title"] for sheet in metadata.get("sheets", [])]

    def get_table(self, source_id: str, sheet_name: str) -> List[Row]:
        """
        Read every populated row of a sheet.

        Trailing empty cells are not returned by the API, so rows can be
        shorter than the header.

        Raises:
            SpreadsheetNotFoundError: If the spreadsheet does not exist
            SheetNotFoundError: If the sheet does not exist
        """
        if sheet_name not in self.list_sheet_names(source_id):
            raise SheetNotFoundError(source_id, sheet_name)

        request = self.service.spreadsheets().values().get(
            spreadsheetId=source_id,
            range=quote_sheet_name(sheet_name),
            majorDimension="ROWS",
            valueRenderOption="FORMATTED_VALUE",
        )
        try:
            response = request.execute()
        except HttpError as e:
            self._raise_for(e, source_id)
        except Exception as e:
            raise SpreadsheetError(
                f"Failed to read spreadsheet: {str(e)}",
                {"spreadsheet_id": source_id, "error_type": type(e).__name__},
            ) from e

        rows = response.get("values", [])
        logger.info(f"Read {len(rows)} rows from sheet '{sheet_name}'")
        return rows
