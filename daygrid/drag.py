# daygrid/drag.py
"""Drag session controller: grab -> move* -> release.

The session is a tagged union (Idle | Dragging | Resolving). Moves are
advisory: they recompute the drop preview from the accumulated delta and never
touch appointment data. The release handler is the only place that writes,
and it writes by returning a new patients tuple.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Literal, Optional, Sequence, Tuple, Union

from .collection import find_owner, iter_appointments, replace_start_time, start_from_minutes
from .config import ScheduleConfig
from .conflicts import find_conflicts, intervals_excluding
from .grid import format_clock
from .log import get_logger
from .model import Appointment, Interval, Patient
from .placement import PlacementResult, resolve_drop
from .position import appointment_to_position, clamped_offset, desired_start_from_offset, grid_bounds

log = get_logger(__name__)

DROP_LABEL = "Drop at {time} ({duration} min)"
CONFLICT_LABEL = "Conflict at {time}"

# DropOutcome.reason values
REASON_COMMITTED = "committed"
REASON_REJECTED = "rejected"
REASON_NO_TARGET = "no_target"
REASON_MISSING = "missing"


@dataclass(frozen=True)
class Idle:
    kind: Literal["idle"] = field(default="idle", init=False)


@dataclass(frozen=True)
class Dragging:
    appointment: Appointment
    patient_id: str
    initial_top: float
    delta_x: float = 0.0
    delta_y: float = 0.0
    desired_start: Optional[int] = None
    has_conflict: bool = False
    label: str = ""
    kind: Literal["dragging"] = field(default="dragging", init=False)


@dataclass(frozen=True)
class Resolving:
    appointment: Appointment
    patient_id: str
    desired_start: int
    kind: Literal["resolving"] = field(default="resolving", init=False)


DragState = Union[Idle, Dragging, Resolving]

IDLE = Idle()


@dataclass(frozen=True)
class DragFeedback:
    desired_start: int
    has_conflict: bool
    label: str
    offset_x: float
    offset_y: float
    conflicts: Tuple[Interval, ...] = ()


@dataclass(frozen=True)
class DropOutcome:
    patients: Tuple[Patient, ...]
    committed: bool
    reason: str
    placement: Optional[PlacementResult] = None
    appointment: Optional[Appointment] = None


def drop_label(minutes: int, duration: int, has_conflict: bool, use_24h: bool) -> str:
    t = format_clock(minutes, use_24h)
    if has_conflict:
        return CONFLICT_LABEL.format(time=t)
    return DROP_LABEL.format(time=t, duration=duration)


class DragController:
    """Drives one drag gesture at a time for a fixed schedule configuration.

    The controller keeps only the grabbed appointment and its owner id. Every
    call that needs the collection takes the host's current one.
    """

    def __init__(self, cfg: ScheduleConfig) -> None:
        self.cfg = cfg
        self.state: DragState = IDLE
        self._pending: Optional[Tuple[float, float]] = None

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    def start(self, patients: Sequence[Patient], appointment_id: str) -> bool:
        """Grab an appointment. Unknown ids leave the controller idle."""
        owner = find_owner(patients, appointment_id)
        if owner is None:
            log.debug("drag.start_ignored", appointment_id=appointment_id)
            return False

        patient, appt = owner
        if not isinstance(self.state, Idle):
            log.debug("drag.restart", previous=self.state.kind, appointment_id=appointment_id)
        self._pending = None
        self.state = Dragging(
            appointment=appt,
            patient_id=patient.id,
            initial_top=appointment_to_position(appt, self.cfg).top,
        )
        log.debug("drag.start", appointment_id=appt.id, patient_id=patient.id)
        return True

    def _others(self, patients: Sequence[Patient], appointment_id: str) -> List[Interval]:
        return intervals_excluding(iter_appointments(patients), appointment_id)

    def _desired_start(self, st: Dragging, delta_y: float) -> int:
        return desired_start_from_offset(st.initial_top, delta_y, st.appointment.duration_min, self.cfg)

    def move(self, patients: Sequence[Patient], delta_x: float, delta_y: float) -> Optional[DragFeedback]:
        """Live preview for the accumulated pointer delta.

        Returns None when idle, or when the dragged appointment is no longer
        in ``patients``.
        """
        st = self.state
        if not isinstance(st, Dragging):
            return None
        if find_owner(patients, st.appointment.id) is None:
            log.debug("drag.move_ignored", appointment_id=st.appointment.id)
            return None

        if self.cfg.restrict_vertical:
            delta_x = 0.0

        duration = st.appointment.duration_min
        desired = self._desired_start(st, delta_y)
        others = self._others(patients, st.appointment.id)
        conflicts = find_conflicts(Interval(start=desired, end=desired + duration), others)
        has_conflict = bool(conflicts)
        label = drop_label(desired, duration, has_conflict, self.cfg.use_24h)

        self.state = replace(
            st,
            delta_x=float(delta_x),
            delta_y=float(delta_y),
            desired_start=desired,
            has_conflict=has_conflict,
            label=label,
        )
        return DragFeedback(
            desired_start=desired,
            has_conflict=has_conflict,
            label=label,
            offset_x=float(delta_x),
            offset_y=clamped_offset(st.initial_top, delta_y, duration, self.cfg),
            conflicts=tuple(conflicts),
        )

    def schedule_move(self, delta_x: float, delta_y: float) -> None:
        """Queue a move for the next frame; only the latest delta survives."""
        if isinstance(self.state, Dragging):
            self._pending = (delta_x, delta_y)

    def flush_frame(self, patients: Sequence[Patient]) -> Optional[DragFeedback]:
        pending, self._pending = self._pending, None
        if pending is None:
            return None
        return self.move(patients, *pending)

    def cancel(self) -> bool:
        """Drop the gesture. Returns False when nothing was being dragged."""
        st = self.state
        self.state = IDLE
        self._pending = None
        if isinstance(st, Idle):
            return False
        log.debug("drag.cancel", appointment_id=st.appointment.id)
        return True

    def end(
        self,
        patients: Sequence[Patient],
        delta_y: Optional[float] = None,
        *,
        over_target: bool = True,
    ) -> Optional[DropOutcome]:
        """Release the card over the host's current ``patients``. Idle: returns None.

        Without a drop target the move is discarded. If the appointment has
        left the collection meanwhile, nothing is written. With smart
        placement off a conflicting drop is rejected. Otherwise the placement
        result is committed to a new patients tuple.
        """
        st = self.state
        if not isinstance(st, Dragging):
            return None
        self._pending = None
        current = tuple(patients)

        if not over_target:
            self.state = IDLE
            log.debug("drag.discard", appointment_id=st.appointment.id)
            return DropOutcome(patients=current, committed=False, reason=REASON_NO_TARGET)

        if find_owner(current, st.appointment.id) is None:
            self.state = IDLE
            log.debug("drag.missing", appointment_id=st.appointment.id)
            return DropOutcome(patients=current, committed=False, reason=REASON_MISSING)

        dy = st.delta_y if delta_y is None else float(delta_y)
        desired = self._desired_start(st, dy)
        resolving = Resolving(appointment=st.appointment, patient_id=st.patient_id, desired_start=desired)
        self.state = resolving

        try:
            appt = resolving.appointment
            placement = resolve_drop(
                desired,
                appt.duration_min,
                self._others(current, appt.id),
                grid_bounds(self.cfg),
                self.cfg.time_step,
                smart=self.cfg.smart_placement,
                original_start=appt.start_minutes,
            )
            if not placement.accepted:
                log.debug("drag.rejected", appointment_id=appt.id, desired_start=desired)
                return DropOutcome(
                    patients=current,
                    committed=False,
                    reason=REASON_REJECTED,
                    placement=placement,
                )

            new_start = start_from_minutes(appt.start_time, placement.start)
            committed = replace_start_time(current, appt.id, new_start)
            owner = find_owner(committed, appt.id)
            updated = owner[1] if owner else None
            log.debug(
                "drag.commit",
                appointment_id=appt.id,
                start=placement.start,
                path=placement.path,
                resolved=placement.resolved,
            )
            return DropOutcome(
                patients=committed,
                committed=True,
                reason=REASON_COMMITTED,
                placement=placement,
                appointment=updated,
            )
        finally:
            self.state = IDLE
