from __future__ import annotations
import calendar
import re
from datetime import date, datetime
from typing import Optional, Tuple, Union

from app.engine.errors import InvalidDateFormat

EPOCH = date(1970, 1, 1)

_MONTH_RE = re.compile(r"^(0[1-9]|1[0-2])-(\d{4})$")


def parse_month(value: str) -> date:
    """
    "MM-YYYY" -> first day of that month.
    """
    m = _MONTH_RE.match(value) if isinstance(value, str) else None
    if not m:
        raise InvalidDateFormat(f"'{value}' is not a valid MM-YYYY month")
    month, year = int(m.group(1)), int(m.group(2))
    if year < 1:
        raise InvalidDateFormat(f"'{value}' is not a valid MM-YYYY month")
    return date(year, month, 1)


def end_of_month(d: date) -> date:
    return date(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def format_month(d: Optional[date]) -> Optional[str]:
    if d is None:
        return None
    return f"{d.month:02d}-{d.year:04d}"


def normalize_window(
    start: Optional[str],
    end: Optional[str],
    *,
    now: date,
) -> Tuple[date, date]:
    """
    Turns the optional MM-YYYY bounds of a cost query into concrete dates:
      - start: 1st of the month, or the epoch when absent
      - end:   last day of the month (whole final month included), or `now` when absent
    """
    period_start = parse_month(start) if start else EPOCH
    period_end = end_of_month(parse_month(end)) if end else now
    return period_start, period_end


def coerce_month(value: Union[date, datetime, str, None]) -> date:
    """
    Reads a stored month value (date, datetime, ISO date string or MM-YYYY)
    and normalizes it to the 1st of its month.
    """
    if isinstance(value, datetime):
        return value.date().replace(day=1)
    if isinstance(value, date):
        return value.replace(day=1)
    if isinstance(value, str) and value:
        if _MONTH_RE.match(value):
            return parse_month(value)
        try:
            return date.fromisoformat(value[:10]).replace(day=1)
        except ValueError:
            pass
    raise InvalidDateFormat(f"unreadable month value: {value!r}")
