"""
Core data models for the IRB facility report.

This module defines the projected facility columns, the typed facility
record and the header/records table passed between pipeline stages.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class FacilityField(str, Enum):
    """Projected facility columns, in record order."""

    CODE = "code"
    NAME = "name"
    DEPT_CODE = "deptCode"
    DEPT_NAME = "deptName"
    PREFECTURE_NAME = "prefectureName"
    RESPONSIBLE_PERSON = "responsiblePerson"
    J_SANKA = "j_sanka"
    IRB = "irb"

    @property
    def source_column(self) -> int:
        """0-based column in the facility sheet."""
        return SOURCE_COLUMNS[self]

    @property
    def position(self) -> int:
        """0-based position within a projected record."""
        return list(FacilityField).index(self)

    @property
    def attribute(self) -> str:
        """Attribute name on FacilityRecord."""
        return self.name.lower()


SOURCE_COLUMNS: Dict[FacilityField, int] = {
    FacilityField.CODE: 0,
    FacilityField.NAME: 1,
    FacilityField.DEPT_CODE: 3,
    FacilityField.DEPT_NAME: 4,
    FacilityField.PREFECTURE_NAME: 7,
    FacilityField.RESPONSIBLE_PERSON: 10,
    FacilityField.J_SANKA: 11,
    FacilityField.IRB: 19,
}


# =============================================================================
# Facility Models
# =============================================================================


class FacilityRecord(BaseModel):
    """One facility row narrowed to the report columns."""

    model_config = ConfigDict(frozen=True)

    code: Optional[str] = Field(None, description="Facility code")
    name: Optional[str] = Field(None, description="Facility name")
    dept_code: Optional[str] = Field(None, description="Department code")
    dept_name: Optional[str] = Field(None, description="Department name")
    prefecture_name: Optional[str] = Field(None, description="Prefecture (region) name")
    responsible_person: Optional[str] = Field(None, description="Responsible person")
    j_sanka: Optional[str] = Field(None, description="Participation flag, '0' or '1'")
    irb: Optional[str] = Field(None, description="Review board flag, '0' or '1'")
    prefecture_code: Optional[int] = Field(
        None,
        description="Region rank, -1 when the region is unknown; set by enrichment",
    )

    @classmethod
    def from_values(cls, values: List[Optional[str]]) -> "FacilityRecord":
        """Build a record from values listed in FacilityField order."""
        return cls(**{field.attribute: value for field, value in zip(FacilityField, values)})

    def get(self, field: FacilityField) -> Optional[str]:
        """Return the value of a projected field."""
        return getattr(self, field.attribute)

    def values(self) -> Tuple[Optional[str], ...]:
        """Projected values in FacilityField order."""
        return tuple(self.get(field) for field in FacilityField)


class FacilityTable(BaseModel):
    """Column titles kept apart from the facility records."""

    model_config = ConfigDict(frozen=True)

    header: Tuple[Optional[str], ...] = Field(default=(), description="Column titles")
    records: List[FacilityRecord] = Field(default_factory=list)

    def with_records(self, records: List[FacilityRecord]) -> "FacilityTable":
        """Return a table with the same header and new records."""
        return FacilityTable(header=self.header, records=list(records))

    def __len__(self) -> int:
        return len(self.records)


class ReportResult(BaseModel):
    """Outcome of building the report."""

    content: str
    table: FacilityTable
    stage_counts: Dict[str, int] = Field(default_factory=dict)
    archived_files: int = 0
    created_file_id: Optional[str] = None

    @property
    def line_count(self) -> int:
        return len(self.table.records)
