# daygrid/position.py
from __future__ import annotations

import math
from typing import Dict, Iterable, Tuple

from .config import OFFSCREEN_TOP, ScheduleConfig
from .model import Appointment, Position


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def grid_origin_minutes(cfg: ScheduleConfig) -> int:
    """Minutes since midnight of the grid's top edge (one hour before opening)."""
    return (cfg.start_hour_24 - 1) * 60


def grid_bounds(cfg: ScheduleConfig) -> Tuple[int, int]:
    lo = grid_origin_minutes(cfg)
    return lo, lo + (cfg.operating_hours + 2) * 60


def minutes_to_top(minutes: int, cfg: ScheduleConfig) -> float:
    return ((minutes - grid_origin_minutes(cfg)) / cfg.time_step) * cfg.slot_height


def appointment_to_position(appt: Appointment, cfg: ScheduleConfig) -> Position:
    lo, hi = grid_bounds(cfg)
    start = appt.start_minutes
    end = start + appt.duration_min
    visible = start >= lo and end <= hi
    return Position(
        top=minutes_to_top(start, cfg) if visible else float(OFFSCREEN_TOP),
        height=(appt.duration_min / cfg.time_step) * cfg.slot_height,
        visible=visible,
    )


def pixel_delta_to_minutes(delta_y: float, cfg: ScheduleConfig) -> int:
    """Pointer delta in pixels, snapped to whole time steps."""
    return _round_half_up(delta_y / cfg.slot_height) * cfg.time_step


def max_top(duration_min: int, cfg: ScheduleConfig) -> float:
    lo, hi = grid_bounds(cfg)
    return ((hi - lo - duration_min) / cfg.time_step) * cfg.slot_height


def desired_start_from_offset(initial_top: float, delta_y: float, duration_min: int, cfg: ScheduleConfig) -> int:
    """Snapped start minute for a card dragged from ``initial_top`` by ``delta_y`` pixels.

    The card top is clamped to the grid before snapping.
    """
    lo, _hi = grid_bounds(cfg)
    top = max(0.0, min(initial_top + delta_y, max_top(duration_min, cfg)))
    raw = (top / cfg.slot_height) * cfg.time_step + lo
    return _round_half_up(raw / cfg.time_step) * cfg.time_step


def clamped_offset(initial_top: float, delta_y: float, duration_min: int, cfg: ScheduleConfig) -> float:
    """Visual translate for the drop preview, clamped the same way as the start."""
    top = max(0.0, min(initial_top + delta_y, max_top(duration_min, cfg)))
    return top - initial_top


def layout_positions(appointments: Iterable[Appointment], cfg: ScheduleConfig) -> Dict[str, Position]:
    """Position per appointment id; recomputed from scratch on every call."""
    return {a.id: appointment_to_position(a, cfg) for a in appointments}
