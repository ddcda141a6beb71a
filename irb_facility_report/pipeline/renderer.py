"""Fixed <TR> template rendering of the report lines."""

from typing import Optional

from irb_facility_report.models import FacilityRecord, FacilityTable

ROW_TEMPLATE = (
    "        <TR><TD>{prefecture_name}</TD><TD>{name}</TD>"
    "<TD>{dept_name}</TD><TD>{responsible_person}</TD></TR>\n"
)


def _text(value: Optional[str]) -> str:
    return "" if value is None else value


def render_row(record: FacilityRecord) -> str:
    """Render one record; values are inserted as-is, without HTML escaping."""
    return ROW_TEMPLATE.format(
        prefecture_name=_text(record.prefecture_name),
        name=_text(record.name),
        dept_name=_text(record.dept_name),
        responsible_person=_text(record.responsible_person),
    )


def render_report(table: FacilityTable) -> str:
    """Concatenate the rendered records; the header renders nothing."""
    return "".join(render_row(record) for record in table.records)
