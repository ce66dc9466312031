# Overview: Comma-separated export of production entries.

"""
Production CSV export.

Column order is fixed: Date, Quantity(g), Team, Shift, Notes. Rows are
ordered by date. Fields that contain the delimiter, a quote or a line break
are quoted (csv.QUOTE_MINIMAL), so notes such as "rain, pump down" stay in
one column.
"""

from __future__ import annotations

import csv
import io

from . import production_service
from mineor.time_utils import parse_iso_date, to_iso_date

PRODUCTION_CSV_HEADER = ["Date", "Quantity(g)", "Team", "Shift", "Notes"]


def _format_grams(value: float):
    return int(value) if float(value).is_integer() else value


def production_rows(productions) -> list[list]:
    return [
        [to_iso_date(p.date), _format_grams(p.quantity_grams), p.team, p.shift, p.notes or ""]
        for p in productions
    ]


def render_production_csv(productions) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(PRODUCTION_CSV_HEADER)
    writer.writerows(production_rows(productions))
    return buffer.getvalue()


def export_filename(start, end) -> str:
    return f"production_{to_iso_date(parse_iso_date(start))}_{to_iso_date(parse_iso_date(end))}.csv"


def export_production_csv(*, site_id: int, start, end) -> str:
    productions = production_service.productions_between(site_id, start, end)
    return render_production_csv(productions)
