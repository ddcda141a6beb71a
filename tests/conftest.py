"""
Shared fixtures: sheet row builders and in-memory collaborators.
"""

from typing import Dict, Iterator, List, Optional

import pytest

from irb_facility_report.config import Settings
from irb_facility_report.models import FacilityField
from irb_facility_report.sources.base import TEXT_MIME_TYPE, FileHandle, FileStore, Row, TableSource
from irb_facility_report.utils.errors import DriveFileNotFoundError, SheetNotFoundError

SHEET_WIDTH = 20

HEADER_TITLES = {
    FacilityField.CODE: "施設コード",
    FacilityField.NAME: "施設名",
    FacilityField.DEPT_CODE: "診療科コード",
    FacilityField.DEPT_NAME: "診療科名",
    FacilityField.PREFECTURE_NAME: "都道府県",
    FacilityField.RESPONSIBLE_PERSON: "責任者",
    FacilityField.J_SANKA: "JPLSG参加",
    FacilityField.IRB: "IRB",
}


def make_row(
    code: Optional[str] = "A001",
    name: Optional[str] = "Alpha",
    dept_code: Optional[str] = "1",
    dept_name: Optional[str] = "Pediatrics",
    prefecture_name: Optional[str] = "Tokyo",
    responsible_person: Optional[str] = "Sato",
    j_sanka: Optional[str] = "1",
    irb: Optional[str] = "1",
) -> Row:
    """Full-width facility sheet row with values at their source columns."""
    values = {
        FacilityField.CODE: code,
        FacilityField.NAME: name,
        FacilityField.DEPT_CODE: dept_code,
        FacilityField.DEPT_NAME: dept_name,
        FacilityField.PREFECTURE_NAME: prefecture_name,
        FacilityField.RESPONSIBLE_PERSON: responsible_person,
        FacilityField.J_SANKA: j_sanka,
        FacilityField.IRB: irb,
    }
    row: Row = [f"x{i}" for i in range(SHEET_WIDTH)]
    for field, value in values.items():
        row[field.source_column] = value
    return row


def make_header() -> Row:
    row: Row = [f"col{i}" for i in range(SHEET_WIDTH)]
    for field, title in HEADER_TITLES.items():
        row[field.source_column] = title
    return row


class InMemoryTableSource(TableSource):
    """TableSource over a dict of {(source_id, sheet_name): rows}."""

    def __init__(self, tables: Dict[tuple, List[Row]]) -> None:
        self.tables = tables
        self.calls: List[tuple] = []

    def get_table(self, source_id: str, sheet_name: str) -> List[Row]:
        self.calls.append((source_id, sheet_name))
        try:
            return self.tables[(source_id, sheet_name)]
        except KeyError:
            raise SheetNotFoundError(source_id, sheet_name)


class InMemoryFileStore(FileStore):
    """FileStore keeping files as dicts with a single parent folder."""

    def __init__(self, folders: List[str]) -> None:
        self.folders = set(folders)
        self.files: List[Dict] = []
        self.fail_create = False
        self._next_id = 0

    def add_file(self, folder_id: str, name: str, content: str = "") -> FileHandle:
        self._next_id += 1
        file = {"id": f"file-{self._next_id}", "name": name, "parents": [folder_id], "content": content}
        self.files.append(file)
        return file

    def files_in(self, folder_id: str) -> List[Dict]:
        return [f for f in self.files if folder_id in f["parents"]]

    def get_folder(self, folder_id: str) -> FileHandle:
        if folder_id not in self.folders:
            raise DriveFileNotFoundError(folder_id)
        return {"id": folder_id}

    def list_files_by_name(self, folder_id: str, name: str) -> Iterator[FileHandle]:
        for file in list(self.files):
            if file["name"] == name and folder_id in file["parents"]:
                yield file

    def move_file(self, file: FileHandle, destination_folder_id: str) -> None:
        file["parents"] = [destination_folder_id]

    def create_file(
        self,
        folder_id: str,
        name: str,
        content: str,
        mime_type: str = TEXT_MIME_TYPE,
    ) -> FileHandle:
        if self.fail_create:
            raise DriveFileNotFoundError(folder_id)
        file = self.add_file(folder_id, name, content)
        file["mimeType"] = mime_type
        return file


@pytest.fixture
def settings():
    """Settings with all required ids present."""
    return Settings(
        input_spreadsheet_id="spreadsheet-1",
        output_folder_id="output-folder",
        save_folder_id="archive-folder",
    )


@pytest.fixture
def region_rows():
    """Region sheet: title row, then prefectures in report order."""
    return [["県名"], ["Tokyo"], ["Osaka"], ["Kyoto"]]


@pytest.fixture
def facility_rows():
    """Facility sheet with the header and a mix of passing and failing rows."""
    return [
        make_header(),
        make_row(code="B002", name="Beta", dept_code="10", prefecture_name="Osaka"),
        make_row(code="A001", name="Alpha", dept_code="5", prefecture_name="Tokyo"),
        make_row(code="C003", name="Gamma", j_sanka="0"),
        make_row(code="D004", name="Delta", irb="0"),
    ]


@pytest.fixture
def table_source(settings, facility_rows, region_rows):
    return InMemoryTableSource(
        {
            (settings.input_spreadsheet_id, settings.facility_sheet_name): facility_rows,
            (settings.input_spreadsheet_id, settings.region_sheet_name): region_rows,
        }
    )


@pytest.fixture
def file_store(settings):
    return InMemoryFileStore([settings.output_folder_id, settings.save_folder_id])
