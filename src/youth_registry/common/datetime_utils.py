from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

_ISO_DATE_PREFIX = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    """Today's date from the local calendar (never a UTC-shifted timestamp)."""
    return now_local().date()


def format_local_date(d: date) -> str:
    """YYYY-MM-DD built from the year/month/day fields of `d`."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_iso_date_as_local(iso: Optional[str]) -> Optional[date]:
    """Read the calendar date of a backend timestamp such as
    "2025-11-05T00:00:00.000Z".

    Only the leading YYYY-MM-DD is used, so the day does not shift when the
    timestamp's offset differs from the local one. Returns None for invalid input.
    """
    if not iso:
        return None
    m = _ISO_DATE_PREFIX.match(iso)
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None

