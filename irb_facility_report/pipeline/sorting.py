"""
Report ordering.

Records are ordered by region rank, then by facility code under Unicode
collation (case and accents are secondary to the base letter, unlike plain
code point order).
"""

from functools import lru_cache
from typing import Tuple

from pyuca import Collator

from irb_facility_report.models import FacilityRecord, FacilityTable
from irb_facility_report.pipeline.regions import UNKNOWN_REGION


@lru_cache(maxsize=1)
def get_collator() -> Collator:
    # Loading the collation table is slow; share one instance.
    return Collator()


def collation_key(value: str) -> Tuple[int, ...]:
    return get_collator().sort_key(value)


def facility_sort_key(record: FacilityRecord) -> Tuple[int, Tuple[int, ...]]:
    prefecture_code = (
        record.prefecture_code if record.prefecture_code is not None else UNKNOWN_REGION
    )
    return prefecture_code, collation_key(record.code or "")


def sort_facilities(table: FacilityTable) -> FacilityTable:
    """Sort records by (prefecture_code, code); the header stays in front."""
    return table.with_records(sorted(table.records, key=facility_sort_key))
