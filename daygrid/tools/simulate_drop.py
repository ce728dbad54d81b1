#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from daygrid.collection import find_owner
from daygrid.drag import DragController
from daygrid.grid import format_clock
from daygrid.log import configure_logging
from daygrid.payload import Schedule, ScheduleValidationError, dump_schedule, load_schedule
from daygrid.position import appointment_to_position, minutes_to_top
from daygrid.util.timeparse import hhmm_to_minutes

PROG = "daygrid-simulate-drop"


def _die(msg: str, rc: int = 2) -> int:
    print(f"[{PROG}] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog=PROG, description="Simulate dragging one appointment and dropping it.")
    ap.add_argument("--in", dest="in_json", required=True, help="Schedule JSON path")
    ap.add_argument("--id", dest="appointment_id", required=True, help="Appointment id to drag")
    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--to", default=None, help="Drop at local time HH:MM")
    target.add_argument("--delta-px", type=float, default=None, help="Vertical pointer delta in pixels")
    ap.add_argument("--no-smart", action="store_true", help="Disable smart placement (conflicting drops are rejected)")
    ap.add_argument("--no-target", action="store_true", help="Release outside any drop target")
    ap.add_argument("--out", default=None, help="Write the resulting schedule JSON here")
    ap.add_argument("--json", dest="as_json", action="store_true", help="Print a JSON summary instead of a status line")
    ap.add_argument("--log-level", default=None, help="Log level (default: env DAYGRID_LOG_LEVEL or WARNING)")
    ns = ap.parse_args(argv)

    try:
        configure_logging(ns.log_level)
    except ValueError as e:
        return _die(str(e))

    p = Path(ns.in_json)
    if not p.exists():
        return _die(f"Missing JSON file: {p}")
    try:
        schedule = load_schedule(p)
    except (ScheduleValidationError, ValueError) as e:
        return _die(f"Invalid schedule: {p} ({e})")

    cfg = schedule.cfg
    if ns.no_smart:
        cfg = replace(cfg, smart_placement=False)

    owner = find_owner(schedule.patients, ns.appointment_id)
    if owner is None:
        return _die(f"Unknown appointment id: {ns.appointment_id}")
    appt = owner[1]

    if ns.to is not None:
        try:
            to_min = hhmm_to_minutes(ns.to)
        except ValueError as e:
            return _die(str(e))
        delta_y = minutes_to_top(to_min, cfg) - appointment_to_position(appt, cfg).top
    else:
        delta_y = float(ns.delta_px)

    ctl = DragController(cfg)
    ctl.start(schedule.patients, appt.id)
    feedback = ctl.move(schedule.patients, 0.0, delta_y)
    outcome = ctl.end(schedule.patients, delta_y, over_target=not ns.no_target)
    if feedback is None or outcome is None:
        return _die("drag session did not start", rc=3)

    placement = outcome.placement
    landed = placement.start if placement is not None else appt.start_minutes
    summary = {
        "appointment_id": appt.id,
        "reason": outcome.reason,
        "committed": outcome.committed,
        "from": format_clock(appt.start_minutes, cfg.use_24h),
        "desired": format_clock(feedback.desired_start, cfg.use_24h),
        "to": format_clock(landed, cfg.use_24h),
        "path": placement.path if placement is not None else None,
        "resolved": placement.resolved if placement is not None else None,
        "label": feedback.label,
    }

    if ns.out:
        dump_schedule(Schedule(cfg=schedule.cfg, patients=outcome.patients), ns.out)

    if ns.as_json:
        print(json.dumps(summary, ensure_ascii=False))
    else:
        print(
            f"[{PROG}] {outcome.reason}: {appt.id} {summary['from']} -> {summary['to']}"
            f" (desired {summary['desired']}, path={summary['path']})"
        )
    return 0 if outcome.committed else 1


if __name__ == "__main__":
    raise SystemExit(main())
