"""
End-to-end facility report job.

This module reads the facility registry and region sheet, runs the
transformation stages and files the rendered report into the output
folder, archiving any previous version first.
"""

from typing import Dict, List, Optional

from irb_facility_report.config import REPORT_FILE_NAME, Settings, get_settings
from irb_facility_report.models import FacilityTable, ReportResult
from irb_facility_report.pipeline import (
    RegionTable,
    enrich_with_regions,
    filter_participating,
    project_rows,
    remove_duplicate_records,
    remove_newlines,
    render_report,
    sort_facilities,
)
from irb_facility_report.sources.base import TEXT_MIME_TYPE, FileHandle, FileStore, Row, TableSource
from irb_facility_report.utils.errors import ReportException, ReportPublishError
from irb_facility_report.utils.logging import LogContext, get_logger, log_performance

logger = get_logger(__name__)


def build_facility_table(
    facility_rows: List[Row],
    region_rows: List[Row],
    stage_counts: Optional[Dict[str, int]] = None,
) -> FacilityTable:
    """
    Run the transformation stages over raw sheet rows.

    Args:
        facility_rows: Facility sheet rows, header first
        region_rows: Region sheet rows, title row first
        stage_counts: Optional dict that receives the record count after each stage

    Returns:
        Sorted, enriched table ready for rendering
    """
    counts = stage_counts if stage_counts is not None else {}

    table = project_rows(facility_rows)
    counts["projected"] = len(table)

    table = filter_participating(table)
    counts["participating"] = len(table)

    table = remove_duplicate_records(table)
    counts["unique"] = len(table)

    table = remove_newlines(table)
    table = enrich_with_regions(table, RegionTable.from_rows(region_rows))
    return sort_facilities(table)


def archive_existing(
    store: FileStore,
    output_folder_id: str,
    archive_folder_id: str,
    file_name: str = REPORT_FILE_NAME,
) -> int:
    """Move every file named `file_name` from the output folder to the archive folder."""
    # Materialize first: moving while paging would shift the listing.
    existing: List[FileHandle] = list(store.list_files_by_name(output_folder_id, file_name))
    for file in existing:
        store.move_file(file, archive_folder_id)

    if existing:
        logger.info(f"Archived {len(existing)} previous {file_name}")
    return len(existing)


def publish_report(
    store: FileStore,
    content: str,
    output_folder_id: str,
    archive_folder_id: str,
    file_name: str = REPORT_FILE_NAME,
    mime_type: str = TEXT_MIME_TYPE,
) -> ReportResult:
    """
    Archive previous versions, then create the new report file.

    The two steps are not atomic: if creation fails, archived files stay in
    the archive folder and ReportPublishError is raised.
    """
    archived = archive_existing(store, output_folder_id, archive_folder_id, file_name)

    try:
        created = store.create_file(output_folder_id, file_name, content, mime_type)
    except ReportException as e:
        if archived:
            raise ReportPublishError(file_name, archived, str(e)) from e
        raise

    return ReportResult(
        content=content,
        table=FacilityTable(),
        archived_files=archived,
        created_file_id=created.get("id"),
    )


class FacilityReportJob:
    """
    Builds and files the participating-facility report.

    The job is a single synchronous pass: it loads both sheets, transforms
    them in memory and writes one file.
    """

    def __init__(
        self,
        table_source: TableSource,
        file_store: FileStore,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.table_source = table_source
        self.file_store = file_store

    @log_performance
    def build_report(self) -> ReportResult:
        """Read the sheets and render the report without writing anything."""
        spreadsheet_id = self.settings.require("input_spreadsheet_id")

        with LogContext(spreadsheet_id=spreadsheet_id):
            facility_rows = self.table_source.get_table(
                spreadsheet_id, self.settings.facility_sheet_name
            )
            region_rows = self.table_source.get_table(
                spreadsheet_id, self.settings.region_sheet_name
            )

            stage_counts: Dict[str, int] = {}
            table = build_facility_table(facility_rows, region_rows, stage_counts)
            content = render_report(table)

        logger.info(
            f"Rendered {len(table)} facilities",
            extra={"stage_counts": stage_counts},
        )
        return ReportResult(content=content, table=table, stage_counts=stage_counts)

    @log_performance
    def run(self) -> ReportResult:
        """Build the report and file it into the output folder."""
        self.settings.validate()
        output_folder_id = self.settings.require("output_folder_id")
        archive_folder_id = self.settings.require("save_folder_id")

        # Unknown folder ids fail before anything is read or moved.
        self.file_store.get_folder(output_folder_id)
        self.file_store.get_folder(archive_folder_id)

        result = self.build_report()

        published = publish_report(
            self.file_store,
            result.content,
            output_folder_id,
            archive_folder_id,
            file_name=self.settings.report_file_name,
            mime_type=self.settings.report_mime_type,
        )

        return result.model_copy(
            update={
                "archived_files": published.archived_files,
                "created_file_id": published.created_file_id,
            }
        )


def create_report_job(settings: Optional[Settings] = None) -> FacilityReportJob:
    """
    Create a report job backed by Google Sheets and Google Drive.

    Both clients share one auth manager, so a single token covers the run.
    """
    from irb_facility_report.google_drive.auth import create_auth_manager
    from irb_facility_report.google_drive.client import GoogleDriveClient
    from irb_facility_report.google_drive.sheets import GoogleSheetsClient

    settings = settings or get_settings()
    auth_manager = create_auth_manager(settings)

    return FacilityReportJob(
        table_source=GoogleSheetsClient(auth_manager),
        file_store=GoogleDriveClient(auth_manager),
        settings=settings,
    )
