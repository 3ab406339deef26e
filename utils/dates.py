# utils/dates.py
from datetime import date, datetime
from typing import Optional

from dateutil import parser
from dateutil.relativedelta import relativedelta

from models.task import TaskFrequency

_STEPS = {
    TaskFrequency.DAILY: relativedelta(days=1),
    TaskFrequency.WEEKLY: relativedelta(days=7),
    TaskFrequency.BIWEEKLY: relativedelta(days=14),
    # relativedelta clamps to the last valid day (Jan 31 -> Feb 28/29)
    TaskFrequency.MONTHLY: relativedelta(months=1),
    TaskFrequency.QUARTERLY: relativedelta(months=3),
}


def add_calendar_unit(day: date, frequency: Optional[TaskFrequency]) -> date:
    """Advance ``day`` by one step of ``frequency``.

    Unknown or missing frequencies leave the date unchanged.
    """
    try:
        step = _STEPS.get(TaskFrequency(frequency)) if frequency else None
    except ValueError:
        step = None
    if step is None:
        return day
    return day + step


def parse_date(x) -> Optional[date]:
    """Coerce ``x`` to a calendar date.

    Empty values give ``None``; anything that cannot be read as a date raises
    ``ValueError``.
    """
    if x is None or (isinstance(x, str) and not x.strip()):
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return parser.parse(str(x)).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unreadable date: {x!r}") from e
