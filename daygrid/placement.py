# daygrid/placement.py
"""Smart placement: where a dropped appointment actually lands.

All values are minutes since local midnight, already snapped to the grid step.

Search, for a desired interval D that overlaps existing appointments C (sorted
by start):
  - per conflict c, prefer the side of c nearest to D's center (strict `<`
    against c's midpoint means a tie goes "after")
  - if that adjacent slot is taken or off-grid, walk outward in time steps,
    checking before/after pairs, up to SEARCH_RADIUS_MIN from c
  - the first free in-bounds candidate wins; later conflicts are not scanned
  - nothing found: keep D's start
Every result is clamped to [min, max - duration].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import SEARCH_RADIUS_MIN
from .conflicts import find_conflicts, is_slot_available
from .log import get_logger
from .model import Interval

log = get_logger(__name__)

# PlacementResult.path values
PATH_DIRECT = "direct"              # no conflict at the drop point
PATH_PREFERRED = "preferred"        # adjacent slot on the preferred side
PATH_SEARCH = "search"              # found by the outward walk
PATH_FALLBACK = "fallback"          # radius exhausted; desired start kept
PATH_REJECTED = "rejected"          # conflict with smart placement off


@dataclass(frozen=True)
class PlacementResult:
    start: int
    desired_start: int
    duration: int
    accepted: bool
    path: str
    conflicts_before: Tuple[Interval, ...] = ()
    conflicts_after: Tuple[Interval, ...] = ()

    @property
    def end(self) -> int:
        return self.start + self.duration

    @property
    def moved(self) -> bool:
        """True when the landing start differs from the drop point."""
        return self.accepted and self.start != self.desired_start

    @property
    def resolved(self) -> bool:
        return self.accepted and not self.conflicts_after


def clamp_start(start: int, duration: int, bounds: Tuple[int, int]) -> int:
    lo, hi = bounds
    return max(lo, min(start, hi - duration))


def _fits(start: int, duration: int, bounds: Tuple[int, int], others: Sequence[Interval]) -> bool:
    lo, hi = bounds
    if start < lo or start + duration > hi:
        return False
    return is_slot_available(start, duration, others)


def search_free_start(
    desired_start: int,
    duration: int,
    conflicts: Sequence[Interval],
    others: Sequence[Interval],
    bounds: Tuple[int, int],
    time_step: int,
    *,
    radius_min: int = SEARCH_RADIUS_MIN,
) -> Optional[Tuple[int, str]]:
    """Return (start, path) for the first acceptable candidate, or None.

    ``others`` is every appointment except the dragged one; candidates are
    checked against all of them, not just the conflict being worked around.
    """
    if duration <= 0 or time_step <= 0:
        return None

    center = desired_start + duration / 2

    for c in sorted(conflicts, key=lambda iv: (iv.start, iv.end)):
        mid = c.start + (c.end - c.start) / 2
        preferred = c.start - duration if center < mid else c.end
        if _fits(preferred, duration, bounds, others):
            return preferred, PATH_PREFERRED

        k = 0
        while k * time_step <= radius_min:
            before = c.start - duration - k * time_step
            if _fits(before, duration, bounds, others):
                return before, PATH_SEARCH
            after = c.end + k * time_step
            if _fits(after, duration, bounds, others):
                return after, PATH_SEARCH
            k += 1

    return None


def resolve_drop(
    desired_start: int,
    duration: int,
    others: Sequence[Interval],
    bounds: Tuple[int, int],
    time_step: int,
    *,
    smart: bool = True,
    original_start: Optional[int] = None,
    radius_min: int = SEARCH_RADIUS_MIN,
) -> PlacementResult:
    """Decide the landing start for a drop at ``desired_start``.

    With smart placement off, a conflicting drop is rejected and the result
    carries ``original_start`` (the pre-drag start) with ``accepted=False``.
    """
    duration = max(1, int(duration))
    desired = Interval(start=desired_start, end=desired_start + duration)
    before: List[Interval] = find_conflicts(desired, others)

    if not before:
        start = clamp_start(desired_start, duration, bounds)
        after = find_conflicts(Interval(start=start, end=start + duration), others)
        return PlacementResult(
            start=start,
            desired_start=desired_start,
            duration=duration,
            accepted=True,
            path=PATH_DIRECT,
            conflicts_after=tuple(after),
        )

    if not smart:
        keep = desired_start if original_start is None else original_start
        log.debug("placement.rejected", desired_start=desired_start, conflicts=len(before))
        return PlacementResult(
            start=keep,
            desired_start=desired_start,
            duration=duration,
            accepted=False,
            path=PATH_REJECTED,
            conflicts_before=tuple(before),
        )

    found = search_free_start(
        desired_start,
        duration,
        before,
        others,
        bounds,
        time_step,
        radius_min=radius_min,
    )
    if found is None:
        start, path = desired_start, PATH_FALLBACK
    else:
        start, path = found

    start = clamp_start(start, duration, bounds)
    after = find_conflicts(Interval(start=start, end=start + duration), others)
    if after:
        log.warning(
            "placement.unresolved",
            desired_start=desired_start,
            duration=duration,
            start=start,
            conflicts=len(after),
            radius_min=radius_min,
        )
    else:
        log.debug("placement.resolved", desired_start=desired_start, start=start, path=path)

    return PlacementResult(
        start=start,
        desired_start=desired_start,
        duration=duration,
        accepted=True,
        path=path,
        conflicts_before=tuple(before),
        conflicts_after=tuple(after),
    )
