# daygrid/collection.py
from __future__ import annotations

import datetime as dt
from dataclasses import replace
from typing import Iterator, Optional, Sequence, Tuple

from .model import Appointment, Patient


def iter_appointments(patients: Sequence[Patient]) -> Iterator[Appointment]:
    for p in patients:
        yield from p.appointments


def find_owner(patients: Sequence[Patient], appointment_id: str) -> Optional[Tuple[Patient, Appointment]]:
    for p in patients:
        for a in p.appointments:
            if a.id == appointment_id:
                return p, a
    return None


def start_from_minutes(original: dt.datetime, minutes: int) -> dt.datetime:
    """Same calendar day as ``original``, at ``minutes`` past its midnight.

    Minutes outside 0..1439 roll into the neighbouring day. On a full-day grid
    a drop into the leading buffer hour (minutes -60..-1) lands at 23:xx of the
    previous day, so the next render shows the card in the trailing buffer
    hour and its conflicts are checked there.
    """
    midnight = original.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + dt.timedelta(minutes=int(minutes))


def replace_start_time(
    patients: Sequence[Patient],
    appointment_id: str,
    new_start: dt.datetime,
) -> Tuple[Patient, ...]:
    """Copy-on-write update of one appointment's start.

    Returns a new tuple; only the owning patient and the updated appointment
    are new objects, every other record is passed through as-is. An unknown id
    returns the input unchanged (as a tuple).
    """
    out = []
    for p in patients:
        idx = next((i for i, a in enumerate(p.appointments) if a.id == appointment_id), -1)
        if idx < 0:
            out.append(p)
            continue
        appts = p.appointments
        updated = replace(appts[idx], start_time=new_start)
        out.append(replace(p, appointments=appts[:idx] + (updated,) + appts[idx + 1:]))
    return tuple(out)
