"""
Abstract interfaces for the report's external collaborators.

The pipeline reads rows from a TableSource and files the rendered report
through a FileStore, so the Google-backed implementations can be swapped
for in-memory ones.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

Row = List[Optional[str]]
FileHandle = Dict[str, Any]

TEXT_MIME_TYPE = "text/plain"


class TableSource(ABC):
    """Source of tabular sheet data."""

    @abstractmethod
    def get_table(self, source_id: str, sheet_name: str) -> List[Row]:
        """
        Read all rows of a named sheet.

        Args:
            source_id: Spreadsheet identifier
            sheet_name: Sheet (tab) name

        Returns:
            Rows as lists of strings, header row first

        Raises:
            SpreadsheetNotFoundError: If the spreadsheet does not exist
            SheetNotFoundError: If the sheet does not exist
        """
        pass


class FileStore(ABC):
    """Hierarchical file store with folders addressed by id."""

    @abstractmethod
    def get_folder(self, folder_id: str) -> FileHandle:
        """
        Look up a folder.

        Raises:
            DriveFileNotFoundError: If no folder has this id
        """
        pass

    @abstractmethod
    def list_files_by_name(self, folder_id: str, name: str) -> Iterator[FileHandle]:
        """Yield every file in the folder with exactly this name."""
        pass

    @abstractmethod
    def move_file(self, file: FileHandle, destination_folder_id: str) -> None:
        """Move a file listed by list_files_by_name into another folder."""
        pass

    @abstractmethod
    def create_file(
        self,
        folder_id: str,
        name: str,
        content: str,
        mime_type: str = TEXT_MIME_TYPE,
    ) -> FileHandle:
        """Create a file with text content and return its handle."""
        pass
