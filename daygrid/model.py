# daygrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Appointment:
    id: str
    start_time: dt.datetime
    duration_min: int

    patient_id: Optional[str] = None
    title: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.duration_min, int) or isinstance(self.duration_min, bool):
            raise ValueError(f"appointment {self.id!r}: duration_min must be int")
        if self.duration_min <= 0:
            raise ValueError(f"appointment {self.id!r}: duration_min must be > 0; got {self.duration_min}")

    @property
    def start_minutes(self) -> int:
        """Minutes since local midnight of the appointment's own day."""
        return self.start_time.hour * 60 + self.start_time.minute

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_min

    @property
    def end_time(self) -> dt.datetime:
        return self.start_time + dt.timedelta(minutes=self.duration_min)

    def interval(self) -> "Interval":
        return Interval(start=self.start_minutes, end=self.end_minutes, id=self.id)


@dataclass(frozen=True)
class Patient:
    """Owning record for a set of appointments."""

    id: str
    name: str
    appointments: Tuple[Appointment, ...] = ()


@dataclass(frozen=True)
class Interval:
    # Half-open [start, end) in minutes since local midnight.
    start: int
    end: int
    id: Optional[str] = None

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class SlotTime:
    hour: int
    minute: int


@dataclass(frozen=True)
class Position:
    top: float
    height: float
    visible: bool


@dataclass(frozen=True)
class ConflictSegment:
    start: int
    end: int
    ids: Tuple[str, ...]
    key: str


__all__ = [
    "Appointment",
    "Patient",
    "Interval",
    "SlotTime",
    "Position",
    "ConflictSegment",
]
