"""Participation filter."""

from irb_facility_report.models import FacilityRecord, FacilityTable
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)

FLAG_ON = "1"


def is_participating(record: FacilityRecord) -> bool:
    """True when both the participation and review-board flags are "1"."""
    return record.j_sanka == FLAG_ON and record.irb == FLAG_ON


def filter_participating(table: FacilityTable) -> FacilityTable:
    """Keep participating facilities; the header always survives."""
    kept = [record for record in table.records if is_participating(record)]
    logger.info(f"Kept {len(kept)} of {len(table.records)} rows with j_sanka=1 and irb=1")
    return table.with_records(kept)
