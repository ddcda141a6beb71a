"""
Column projection for the facility sheet.

Narrows full-width sheet rows to the report columns. The first row is
taken as the header and kept apart from the data records.
"""

from typing import Iterable, List, Optional, Sequence

from irb_facility_report.models import FacilityField, FacilityRecord, FacilityTable
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)


def _pick(row: Sequence[Optional[str]], index: int) -> Optional[str]:
    # Short rows project to None instead of raising.
    return row[index] if index < len(row) else None


def project_row(
    row: Sequence[Optional[str]],
    columns: Iterable[FacilityField] = FacilityField,
) -> List[Optional[str]]:
    """Return the listed source columns of one row, in listed order."""
    return [_pick(row, field.source_column) for field in columns]


def project_rows(rows: Sequence[Sequence[Optional[str]]]) -> FacilityTable:
    """
    Project raw sheet rows onto the facility columns.

    Args:
        rows: Header row followed by data rows

    Returns:
        Table with the projected header and one record per data row
    """
    if not rows:
        return FacilityTable()

    header = tuple(project_row(rows[0]))
    records = [FacilityRecord.from_values(project_row(row)) for row in rows[1:]]

    logger.debug(f"Projected {len(records)} facility rows")
    return FacilityTable(header=header, records=records)
