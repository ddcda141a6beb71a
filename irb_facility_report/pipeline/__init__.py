"""
Facility report transformation stages.

Each stage takes and returns a FacilityTable, so the stages chain in the
order listed here.
"""

from irb_facility_report.pipeline.dedup import compare_department_codes, remove_duplicate_records
from irb_facility_report.pipeline.filters import filter_participating, is_participating
from irb_facility_report.pipeline.projector import project_row, project_rows
from irb_facility_report.pipeline.regions import UNKNOWN_REGION, RegionTable, enrich_with_regions
from irb_facility_report.pipeline.renderer import render_report, render_row
from irb_facility_report.pipeline.sanitizer import remove_newlines
from irb_facility_report.pipeline.sorting import facility_sort_key, sort_facilities

__all__ = [
    "project_row",
    "project_rows",
    "is_participating",
    "filter_participating",
    "compare_department_codes",
    "remove_duplicate_records",
    "remove_newlines",
    "UNKNOWN_REGION",
    "RegionTable",
    "enrich_with_regions",
    "facility_sort_key",
    "sort_facilities",
    "render_row",
    "render_report",
]
