"""Date helpers for CNB documents."""

from __future__ import annotations

from datetime import date, datetime

CNB_DATE_FORMAT = "%d.%m.%Y"


def parse_cnb_date(value: str | date | None) -> date | None:
    """Parse the ``dd.mm.yyyy`` dates CNB prints on its rate tables."""

    if value is None or isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), CNB_DATE_FORMAT).date()
    except ValueError:
        return None
