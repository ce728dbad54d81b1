# daygrid/payload.py
"""Schedule payload (JSON) <-> engine objects.

Shape:
  {"cfg": {...ScheduleConfig fields...},
   "patients": [{"id", "name", "appointments": [{"id", "start", "duration_min", "title"?}]}]}

`start` is an ISO-8601 local date-time ("2025-03-02T09:00").
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .config import ConfigError, ScheduleConfig
from .model import Appointment, Patient
from .util.timeparse import format_local_datetime, parse_local_datetime

JsonPath = Union[str, Path]


class ScheduleValidationError(ValueError):
    """Raised when a schedule payload fails validation."""


@dataclass(frozen=True)
class Schedule:
    cfg: ScheduleConfig
    patients: Tuple[Patient, ...]


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _nonempty_str(v: Any) -> bool:
    return isinstance(v, str) and bool(v.strip())


def validate_schedule_dict(d: Any) -> List[str]:
    """Return all problems found (empty list means valid)."""
    errs: List[str] = []
    if not isinstance(d, dict):
        return [f"schedule must be an object/dict; got {type(d).__name__}"]

    cfg = d.get("cfg", {})
    if not isinstance(cfg, dict):
        errs.append("cfg must be dict")
    else:
        try:
            ScheduleConfig.from_dict(cfg)
        except ConfigError as e:
            errs.append(f"cfg: {e}")

    patients = d.get("patients")
    _require(isinstance(patients, list), "patients must be list", errs)
    if not isinstance(patients, list):
        return errs

    seen: Dict[str, str] = {}
    for i, p in enumerate(patients):
        where = f"patients[{i}]"
        if not isinstance(p, dict):
            errs.append(f"{where} must be dict")
            continue
        _require(_nonempty_str(p.get("id")), f"{where}.id must be non-empty string", errs)
        _require(isinstance(p.get("name", ""), str), f"{where}.name must be string", errs)
        appts = p.get("appointments", [])
        if not isinstance(appts, list):
            errs.append(f"{where}.appointments must be list")
            continue
        for j, a in enumerate(appts):
            aw = f"{where}.appointments[{j}]"
            if not isinstance(a, dict):
                errs.append(f"{aw} must be dict")
                continue
            aid = a.get("id")
            if not _nonempty_str(aid):
                errs.append(f"{aw}.id must be non-empty string")
            elif aid in seen:
                errs.append(f"{aw}.id duplicates {seen[aid]}: {aid!r}")
            else:
                seen[aid] = aw

            start = a.get("start")
            if not _nonempty_str(start):
                errs.append(f"{aw}.start must be ISO date-time string")
            else:
                try:
                    parse_local_datetime(start)
                except ValueError as e:
                    errs.append(f"{aw}.start: {e}")

            dur = a.get("duration_min")
            _require(
                isinstance(dur, int) and not isinstance(dur, bool) and dur > 0,
                f"{aw}.duration_min must be positive int",
                errs,
            )
            _require(isinstance(a.get("title", ""), str), f"{aw}.title must be string", errs)
    return errs


def assert_valid_schedule(d: Any) -> None:
    errs = validate_schedule_dict(d)
    if errs:
        raise ScheduleValidationError("; ".join(errs))


def schedule_from_dict(d: Dict[str, Any]) -> Schedule:
    assert_valid_schedule(d)
    cfg = ScheduleConfig.from_dict(d.get("cfg", {}))
    patients: List[Patient] = []
    for p in d["patients"]:
        appts = tuple(
            Appointment(
                id=a["id"],
                start_time=parse_local_datetime(a["start"]),
                duration_min=int(a["duration_min"]),
                patient_id=p["id"],
                title=a.get("title", ""),
            )
            for a in p.get("appointments", [])
        )
        patients.append(Patient(id=p["id"], name=p.get("name", ""), appointments=appts))
    return Schedule(cfg=cfg, patients=tuple(patients))


def schedule_to_dict(schedule: Schedule) -> Dict[str, Any]:
    return {
        "cfg": schedule.cfg.to_dict(),
        "patients": [
            {
                "id": p.id,
                "name": p.name,
                "appointments": [
                    {
                        "id": a.id,
                        "start": format_local_datetime(a.start_time),
                        "duration_min": a.duration_min,
                        "title": a.title,
                    }
                    for a in p.appointments
                ],
            }
            for p in schedule.patients
        ],
    }


def load_schedule(path: JsonPath) -> Schedule:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8"))
    return schedule_from_dict(obj)


def dump_schedule(schedule: Schedule, path: JsonPath, *, pretty: bool = True) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    txt = json.dumps(schedule_to_dict(schedule), ensure_ascii=False, indent=2 if pretty else None)
    p.write_text(txt + "\n", encoding="utf-8", newline="\n")
