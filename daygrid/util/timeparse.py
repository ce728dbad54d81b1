# daygrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def hhmm_to_minutes(s: str) -> int:
    hh, mm = parse_hhmm(s)
    return hh * 60 + mm


def parse_local_datetime(s: str) -> dt.datetime:
    """ISO-8601 date-time on the local wall clock.

    Values with an offset (or a trailing Z) are converted to local time and
    returned naive; naive values are taken as local already.
    """
    raw = s.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        d = dt.datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Invalid ISO date-time: {s!r}") from None
    if d.tzinfo is not None:
        d = d.astimezone().replace(tzinfo=None)
    return d


def format_local_datetime(d: dt.datetime) -> str:
    return d.replace(second=0, microsecond=0).isoformat(timespec="minutes")
