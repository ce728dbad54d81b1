# daygrid/conflicts.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .model import Appointment, ConflictSegment, Interval


def overlaps(a: Interval, b: Interval) -> bool:
    # Touching endpoints are not a conflict.
    return a.start < b.end and a.end > b.start


def find_conflicts(candidate: Interval, others: Iterable[Interval]) -> List[Interval]:
    """Intervals in ``others`` that overlap ``candidate``.

    The appointment being moved must already be excluded from ``others``.
    """
    return [o for o in others if overlaps(candidate, o)]


def is_slot_available(start: int, duration: int, others: Iterable[Interval]) -> bool:
    return not find_conflicts(Interval(start=start, end=start + duration), others)


def intervals_excluding(appointments: Iterable[Appointment], exclude_id: Optional[str]) -> List[Interval]:
    return [a.interval() for a in appointments if a.id != exclude_id]


def conflict_segments(intervals: Sequence[Interval]) -> List[ConflictSegment]:
    """Maximal spans where two or more intervals overlap (sweep line).

    Adjacent spans with the same set of ids are merged into one segment.
    """
    segments: List[ConflictSegment] = []

    pts: List[Tuple[int, int, str]] = []
    for i, iv in enumerate(intervals):
        if iv.end <= iv.start:
            continue
        key = iv.id if iv.id is not None else f"#{i}"
        pts.append((iv.start, +1, key))
        pts.append((iv.end, -1, key))
    # Ends sort before starts at the same instant: touching is not overlapping.
    pts.sort(key=lambda x: (x[0], x[1]))

    active: Set[str] = set()
    prev_t: Optional[int] = None

    for t, kind, key in pts:
        if prev_t is not None and t > prev_t and len(active) >= 2:
            ids = tuple(sorted(active))
            joined = ",".join(ids)
            last = segments[-1] if segments else None
            if last and last.key == joined and last.end == prev_t:
                segments[-1] = ConflictSegment(start=last.start, end=t, ids=last.ids, key=last.key)
            else:
                segments.append(ConflictSegment(start=prev_t, end=t, ids=ids, key=joined))

        if kind == +1:
            active.add(key)
        else:
            active.discard(key)
        prev_t = t

    return segments
