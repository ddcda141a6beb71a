"""
Region (prefecture) ranks and record enrichment.

The region sheet lists prefectures in report order under a single title row.
A prefecture's rank is its 1-based position below that title row.
"""

from typing import Dict, List, Optional, Sequence

from irb_facility_report.models import FacilityTable
from irb_facility_report.utils.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_REGION = -1


class RegionTable:
    """Ordered region names with their ranks."""

    def __init__(self, names: Sequence[Optional[str]], title: Optional[str] = None) -> None:
        self.names: List[Optional[str]] = list(names)
        self.title = title
        # A repeated name ranks at its last occurrence.
        self._ranks: Dict[Optional[str], int] = {
            name: rank for rank, name in enumerate(self.names, start=1)
        }

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> "RegionTable":
        """Build from sheet rows; row 0 is the title row, column 0 holds names."""
        if not rows:
            return cls([])
        title = rows[0][0] if rows[0] else None
        return cls([row[0] if row else "" for row in rows[1:]], title=title)

    def rank_of(self, name: Optional[str]) -> int:
        return self._ranks.get(name, UNKNOWN_REGION)

    def __contains__(self, name: object) -> bool:
        return name in self._ranks

    def __len__(self) -> int:
        return len(self.names)


def enrich_with_regions(table: FacilityTable, regions: RegionTable) -> FacilityTable:
    """Set prefecture_code on every record from its prefecture name."""
    records = [
        record.model_copy(update={"prefecture_code": regions.rank_of(record.prefecture_name)})
        for record in table.records
    ]

    unknown = sorted(
        {r.prefecture_name or "" for r in records if r.prefecture_code == UNKNOWN_REGION}
    )
    if unknown:
        logger.warning(f"Prefectures not in the region sheet: {', '.join(unknown)}")

    return table.with_records(records)
