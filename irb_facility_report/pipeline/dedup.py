"""
Duplicate facility resolution.

A facility can be listed once per department. The report keeps one row per
facility code: the one with the smallest department code.
"""

import re
from decimal import Decimal
from typing import Dict, Optional

from irb_facility_report.models import FacilityRecord, FacilityTable
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)

_NUMERIC = re.compile(r"^\s*[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$")


def is_numeric(value: Optional[str]) -> bool:
    return value is not None and bool(_NUMERIC.match(value))


def compare_department_codes(left: Optional[str], right: Optional[str]) -> int:
    """
    Three-way comparison of department codes.

    Codes compare as numbers when both look numeric ("9" < "10"), otherwise
    as strings. Only ASCII digits are numeric: full-width codes such as "１０"
    compare as strings. A missing code compares as the empty string.

    Returns:
        Negative if left < right, zero if equal, positive if left > right
    """
    if is_numeric(left) and is_numeric(right):
        a, b = Decimal(left.strip()), Decimal(right.strip())
    else:
        a, b = left or "", right or ""
    return (a > b) - (a < b)


def remove_duplicate_records(table: FacilityTable) -> FacilityTable:
    """
    Collapse records sharing a facility code.

    The first record seen for a code is kept until a later one has a strictly
    smaller department code. A replacement moves to the end of the current
    ordering, so the result is not a stable dedup; the sorter restores order.
    """
    best: Dict[Optional[str], FacilityRecord] = {}

    for record in table.records:
        kept = best.get(record.code)
        if kept is None:
            best[record.code] = record
        elif compare_department_codes(kept.dept_code, record.dept_code) > 0:
            del best[record.code]
            best[record.code] = record

    dropped = len(table.records) - len(best)
    if dropped:
        logger.info(f"Removed {dropped} duplicate facility rows")
    return table.with_records(list(best.values()))
