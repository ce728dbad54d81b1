"""daygrid.api

Stable *library* entrypoint for daygrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from daygrid.collection import find_owner, iter_appointments, replace_start_time, start_from_minutes
from daygrid.config import (
    ConfigError,
    ScheduleConfig,
    start_hour_24,
    with_operating_hours,
    with_time_format,
)
from daygrid.conflicts import conflict_segments, find_conflicts, intervals_excluding, is_slot_available, overlaps
from daygrid.drag import DragController, DragFeedback, Dragging, DropOutcome, Idle, Resolving
from daygrid.grid import format_clock, slot_count, slot_index_to_time, time_to_slot_index, timeline
from daygrid.model import Appointment, ConflictSegment, Interval, Patient, Position, SlotTime
from daygrid.payload import (
    Schedule,
    ScheduleValidationError,
    assert_valid_schedule,
    load_schedule,
    schedule_from_dict,
    schedule_to_dict,
    validate_schedule_dict,
)
from daygrid.placement import PlacementResult, resolve_drop, search_free_start
from daygrid.position import (
    appointment_to_position,
    desired_start_from_offset,
    grid_bounds,
    grid_origin_minutes,
    layout_positions,
    pixel_delta_to_minutes,
)

__all__ = [
    # model
    "Appointment",
    "Patient",
    "Interval",
    "SlotTime",
    "Position",
    "ConflictSegment",
    # config
    "ScheduleConfig",
    "ConfigError",
    "start_hour_24",
    "with_operating_hours",
    "with_time_format",
    # time grid
    "slot_count",
    "slot_index_to_time",
    "time_to_slot_index",
    "timeline",
    "format_clock",
    # positions
    "grid_origin_minutes",
    "grid_bounds",
    "appointment_to_position",
    "layout_positions",
    "pixel_delta_to_minutes",
    "desired_start_from_offset",
    # conflicts
    "overlaps",
    "find_conflicts",
    "is_slot_available",
    "intervals_excluding",
    "conflict_segments",
    # placement
    "PlacementResult",
    "resolve_drop",
    "search_free_start",
    # collection
    "iter_appointments",
    "find_owner",
    "replace_start_time",
    "start_from_minutes",
    # drag
    "DragController",
    "DragFeedback",
    "DropOutcome",
    "Idle",
    "Dragging",
    "Resolving",
    # payload
    "Schedule",
    "ScheduleValidationError",
    "validate_schedule_dict",
    "assert_valid_schedule",
    "schedule_from_dict",
    "schedule_to_dict",
    "load_schedule",
]
