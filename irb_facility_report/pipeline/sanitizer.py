"""Newline removal for every field of the table."""

from typing import Optional

from irb_facility_report.models import FacilityRecord, FacilityTable


def strip_newlines(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.replace("\n", "")


def sanitize_record(record: FacilityRecord) -> FacilityRecord:
    return record.model_copy(
        update={
            name: strip_newlines(value)
            for name, value in record
            if isinstance(value, str)
        }
    )


def remove_newlines(table: FacilityTable) -> FacilityTable:
    """Remove newline characters from the header and every record."""
    return FacilityTable(
        header=tuple(strip_newlines(title) for title in table.header),
        records=[sanitize_record(record) for record in table.records],
    )
