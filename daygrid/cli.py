from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Dict, List

from .collection import iter_appointments
from .config import ConfigError, ScheduleConfig, with_operating_hours, with_time_format
from .conflicts import conflict_segments
from .grid import format_clock, timeline
from .log import configure_logging
from .model import Appointment
from .payload import ScheduleValidationError, load_schedule
from .position import grid_origin_minutes, layout_positions


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid] ERROR: {msg}", file=sys.stderr)
    return rc


def _apply_overrides(cfg: ScheduleConfig, args: argparse.Namespace) -> ScheduleConfig:
    if args.operating_hours is not None:
        cfg = with_operating_hours(cfg, args.operating_hours)
    if args.time_12h:
        cfg = with_time_format(cfg, False)
    if args.start_hour is not None:
        cfg = replace(cfg, start_hour=args.start_hour)
    if args.meridiem is not None:
        cfg = replace(cfg, meridiem=args.meridiem.upper())
    if args.time_step is not None:
        cfg = replace(cfg, time_step=args.time_step)
    return cfg


def render_day(patients, cfg: ScheduleConfig) -> List[str]:
    appts: List[Appointment] = list(iter_appointments(patients))
    positions = layout_positions(appts, cfg)
    origin = grid_origin_minutes(cfg)

    by_slot: Dict[int, List[Appointment]] = {}
    hidden: List[Appointment] = []
    for a in sorted(appts, key=lambda x: (x.start_minutes, x.id)):
        if not positions[a.id].visible:
            hidden.append(a)
            continue
        by_slot.setdefault((a.start_minutes - origin) // cfg.time_step, []).append(a)

    lines: List[str] = []
    for row in timeline(cfg):
        clock = format_clock(origin + row.index * cfg.time_step, cfg.use_24h)
        mark = "-" if row.is_hour_start else "."
        lines.append(f"{clock} {mark}")
        for a in by_slot.get(row.index, []):
            pos = positions[a.id]
            end = format_clock(a.end_minutes, cfg.use_24h)
            title = f" {a.title}" if a.title else ""
            lines.append(f"        | {a.id}{title} -> {end} ({a.duration_min} min) top={pos.top:g} h={pos.height:g}")

    if hidden:
        lines.append("off-grid:")
        for a in hidden:
            lines.append(f"  {a.id} {format_clock(a.start_minutes, cfg.use_24h)} ({a.duration_min} min)")

    segs = conflict_segments([a.interval() for a in appts])
    if segs:
        lines.append("conflicts:")
        for s in segs:
            lines.append(
                f"  {format_clock(s.start, cfg.use_24h)}-{format_clock(s.end, cfg.use_24h)} {', '.join(s.ids)}"
            )
    return lines


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="daygrid", description="Print the day grid for a schedule JSON file.")
    ap.add_argument("--in", dest="in_json", required=True, help="Schedule JSON path")
    ap.add_argument("--operating-hours", type=int, default=None, help="Override cfg.operating_hours (6/8/12/16/24)")
    ap.add_argument("--start-hour", type=int, default=None, help="Override cfg.start_hour")
    ap.add_argument("--meridiem", default=None, choices=["AM", "PM", "am", "pm"], help="Override cfg.meridiem (12h mode)")
    ap.add_argument("--time-step", type=int, default=None, help="Override cfg.time_step (15/20/30/60)")
    ap.add_argument("--12h", dest="time_12h", action="store_true", help="Display 12-hour clock")
    ap.add_argument("--log-level", default=None, help="Log level (default: env DAYGRID_LOG_LEVEL or WARNING)")
    args = ap.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as e:
        return _die(str(e))

    try:
        schedule = load_schedule(args.in_json)
    except FileNotFoundError:
        return _die(f"Missing JSON file: {args.in_json}")
    except (ScheduleValidationError, ValueError) as e:
        return _die(f"Invalid schedule: {e}")

    try:
        cfg = _apply_overrides(schedule.cfg, args)
    except ConfigError as e:
        return _die(f"Invalid configuration: {e}")

    for line in render_day(schedule.patients, cfg):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
