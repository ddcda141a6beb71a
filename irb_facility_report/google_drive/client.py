"""
Google Drive API client for report filing.

This module provides the Drive-backed FileStore: finding files by name in a
folder, moving them between folders and uploading the text report.
"""

from typing import Any, Dict, Iterator, Optional

from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaInMemoryUpload

from irb_facility_report.google_drive.auth import AuthManager, create_auth_manager
from irb_facility_report.sources.base import TEXT_MIME_TYPE, FileHandle, FileStore
from irb_facility_report.utils.errors import (
    DriveFileNotFoundError,
    DriveQuotaExceededError,
    GoogleDriveError,
)
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
FILE_FIELDS = "id, name, mimeType, parents"


def escape_query_value(value: str) -> str:
    """Escape a string literal for a Drive search query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def translate_http_error(error: HttpError, resource_id: str, action: str) -> GoogleDriveError:
    """Map an API HttpError to the matching GoogleDriveError."""
    status = getattr(error.resp, "status", None)
    if status == 404:
        return DriveFileNotFoundError(resource_id)
    if status == 429:
        retry_after = error.resp.get("retry-after") if hasattr(error.resp, "get") else None
        return DriveQuotaExceededError(retry_after=int(retry_after) if retry_after else None)
    return GoogleDriveError(f"Failed to {action}: {str(error)}", {"id": resource_id, "status": status})


class GoogleDriveClient(FileStore):
    """Client for Google Drive operations."""

    def __init__(
        self,
        auth_manager: Optional[AuthManager] = None,
        service: Optional[Resource] = None,
        page_size: int = 100,
    ) -> None:
        """
        Initialize Google Drive client.

        Args:
            auth_manager: Authentication manager
            service: Prebuilt Drive v3 resource (skips connect)
            page_size: Number of files per page when listing
        """
        self.auth_manager = auth_manager
        self.page_size = page_size

        self._service: Optional[Resource] = service

    def connect(self) -> None:
        """
        Connect to Google Drive API.

        Raises:
            DriveAuthenticationError: If authentication fails
        """
        if self._service:
            return

        if self.auth_manager is None:
            self.auth_manager = create_auth_manager()
        if not self.auth_manager.is_authenticated:
            self.auth_manager.authenticate()

        try:
            self._service = build(
                "drive",
                "v3",
                credentials=self.auth_manager.credentials,
                cache_discovery=False,
            )
            logger.info("Connected to Google Drive API")
        except Exception as e:
            logger.error(f"Failed to build Drive service: {e}")
            raise GoogleDriveError(f"Failed to connect to Drive API: {str(e)}")

    @property
    def service(self) -> Resource:
        if not self._service:
            self.connect()
        return self._service

    def _execute(self, request, resource_id: str, action: str) -> Dict[str, Any]:
        """
        Execute an API request.

        Raises:
            GoogleDriveError: For any failure, including transport and
                credential refresh errors raised outside HttpError
        """
        try:
            return request.execute()
        except HttpError as e:
            logger.error(f"Failed to {action} {resource_id}: {e}")
            raise translate_http_error(e, resource_id, action)
        except Exception as e:
            logger.error(f"Failed to {action} {resource_id}: {e}")
            raise GoogleDriveError(
                f"Failed to {action}: {str(e)}",
                {"id": resource_id, "error_type": type(e).__name__},
            ) from e

    def get_folder(self, folder_id: str) -> Dict[str, Any]:
        """
        Get folder metadata.

        Raises:
            DriveFileNotFoundError: If the id does not exist or is not a folder
        """
        request = self.service.files().get(
            fileId=folder_id,
            fields=FILE_FIELDS,
            supportsAllDrives=True,
        )
        metadata = self._execute(request, folder_id, "get folder")

        if metadata.get("mimeType") != FOLDER_MIME_TYPE:
            raise DriveFileNotFoundError(folder_id)
        return metadata

    def list_files_by_name(self, folder_id: str, name: str) -> Iterator[FileHandle]:
        """Yield every non-trashed file named `name` directly inside the folder."""
        query = " and ".join(
            [
                f"name = '{escape_query_value(name)}'",
                f"'{escape_query_value(folder_id)}' in parents",
                "trashed = false",
            ]
        )

        page_token = None
        while True:
            request = self.service.files().list(
                q=query,
                pageSize=self.page_size,
                pageToken=page_token,
                fields=f"nextPageToken, files({FILE_FIELDS})",
                supportsAllDrives=True,
                includeItemsFromAllDrives=True,
            )
            response = self._execute(request, folder_id, "list files")

            yield from response.get("files", [])

            page_token = response.get("nextPageToken")
            if not page_token:
                break

    def move_file(self, file: FileHandle, destination_folder_id: str) -> None:
        """Move a file into the destination folder, detaching it from its current parents."""
        file_id = file["id"]
        previous_parents = ",".join(file.get("parents", []))

        request = self.service.files().update(
            fileId=file_id,
            addParents=destination_folder_id,
            removeParents=previous_parents,
            fields="id, parents",
            supportsAllDrives=True,
        )
        self._execute(request, file_id, "move file")

        logger.debug(f"Moved {file.get('name', file_id)} to folder {destination_folder_id}")

    def create_file(
        self,
        folder_id: str,
        name: str,
        content: str,
        mime_type: str = TEXT_MIME_TYPE,
    ) -> FileHandle:
        """Upload text content as a new file in the folder."""
        media = MediaInMemoryUpload(content.encode("utf-8"), mimetype=mime_type, resumable=False)
        body = {"name": name, "parents": [folder_id], "mimeType": mime_type}

        request = self.service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            supportsAllDrives=True,
        )
        created = self._execute(request, folder_id, "create file")

        logger.info(f"Created {name} ({len(content)} chars) in folder {folder_id}")
        return created
