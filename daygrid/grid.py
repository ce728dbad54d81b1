# daygrid/grid.py
"""Slot index <-> wall-clock mapping for the day grid.

The grid starts one hour before the configured start hour and ends one hour
after the nominal close, so boundary appointments stay visible and draggable.
Times here carry no date: hours wrap modulo 24.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

from .config import ScheduleConfig
from .model import SlotTime

DAY_MIN = 24 * 60


class _HasClock(Protocol):
    hour: int
    minute: int


@dataclass(frozen=True)
class SlotLabel:
    index: int
    hour: int
    minute: int
    display_hour: int
    meridiem: str
    is_hour_start: bool
    height: float


def slot_count(cfg: ScheduleConfig) -> int:
    return (cfg.operating_hours + 2) * cfg.steps_per_hour + 1


def _base_hour(cfg: ScheduleConfig) -> int:
    return cfg.start_hour_24 - 1


def slot_index_to_time(index: int, cfg: ScheduleConfig) -> SlotTime:
    sph = cfg.steps_per_hour
    hour = (_base_hour(cfg) + index // sph) % 24
    minute = (index % sph) * cfg.time_step
    return SlotTime(hour=hour, minute=minute)


def time_to_slot_index(t: _HasClock, cfg: ScheduleConfig) -> int:
    """Inverse of slot_index_to_time.

    Ambiguous across midnight for a full-day grid (26 hours shown): the earliest
    index is returned.
    """
    minutes = int(t.hour) * 60 + int(t.minute)
    offset = (minutes - _base_hour(cfg) * 60) % DAY_MIN
    if offset % cfg.time_step:
        raise ValueError(f"{t.hour:02d}:{t.minute:02d} is not on a {cfg.time_step}-minute step")
    return offset // cfg.time_step


def format_clock(minutes: int, use_24h: bool) -> str:
    m = int(minutes) % DAY_MIN
    hh, mm = divmod(m, 60)
    if use_24h:
        return f"{hh:02d}:{mm:02d}"
    return f"{(hh % 12) or 12:02d}:{mm:02d} {'AM' if hh < 12 else 'PM'}"


def timeline(cfg: ScheduleConfig) -> List[SlotLabel]:
    """Ruler rows for the grid; first and last rows are half height."""
    n = slot_count(cfg)
    out: List[SlotLabel] = []
    for idx in range(n):
        t = slot_index_to_time(idx, cfg)
        edge = idx == 0 or idx == n - 1
        out.append(
            SlotLabel(
                index=idx,
                hour=t.hour,
                minute=t.minute,
                display_hour=t.hour if cfg.use_24h else t.hour % 12,
                meridiem="AM" if t.hour < 12 else "PM",
                is_hour_start=t.minute == 0,
                height=cfg.slot_height / 2 if edge else cfg.slot_height,
            )
        )
    return out
