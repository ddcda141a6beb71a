"""Table source and file store interfaces."""

from irb_facility_report.sources.base import (
    TEXT_MIME_TYPE,
    FileHandle,
    FileStore,
    Row,
    TableSource,
)

__all__ = ["TEXT_MIME_TYPE", "FileHandle", "FileStore", "Row", "TableSource"]
