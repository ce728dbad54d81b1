# daygrid/config.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping

OPERATING_HOURS_CHOICES = (6, 8, 12, 16, 24)
TIME_STEP_CHOICES = (15, 20, 30, 60)
MERIDIEMS = ("AM", "PM")

MAX_SLOT_HEIGHT = 192
DEFAULT_START_HOUR = 8
DEFAULT_OPERATING_HOURS = 8
DEFAULT_TIME_STEP = 15

# Placement search stops expanding past this many minutes from a conflict.
SEARCH_RADIUS_MIN = 4 * 60

# Off-grid appointments are parked here instead of being unmounted.
OFFSCREEN_TOP = -1000


class ConfigError(ValueError):
    """Raised when a schedule configuration is not one of the supported shapes."""


@dataclass(frozen=True)
class ScheduleConfig:
    operating_hours: int = DEFAULT_OPERATING_HOURS
    start_hour: int = DEFAULT_START_HOUR
    meridiem: str = "AM"
    time_step: int = DEFAULT_TIME_STEP
    use_24h: bool = True
    smart_placement: bool = True
    restrict_vertical: bool = True

    def __post_init__(self) -> None:
        if self.operating_hours not in OPERATING_HOURS_CHOICES:
            raise ConfigError(
                f"operating_hours must be one of {OPERATING_HOURS_CHOICES}; got {self.operating_hours!r}"
            )
        if self.time_step not in TIME_STEP_CHOICES:
            raise ConfigError(f"time_step must be one of {TIME_STEP_CHOICES}; got {self.time_step!r}")
        if self.meridiem not in MERIDIEMS:
            raise ConfigError(f"meridiem must be AM or PM; got {self.meridiem!r}")
        if not isinstance(self.start_hour, int) or isinstance(self.start_hour, bool):
            raise ConfigError(f"start_hour must be int; got {type(self.start_hour).__name__}")
        if self.use_24h:
            if not (0 <= self.start_hour <= 23):
                raise ConfigError(f"start_hour must be 0-23 in 24h mode; got {self.start_hour}")
        elif not (1 <= self.start_hour <= 12):
            raise ConfigError(f"start_hour must be 1-12 in 12h mode; got {self.start_hour}")

    @property
    def steps_per_hour(self) -> int:
        return 60 // self.time_step

    @property
    def slot_height(self) -> float:
        return MAX_SLOT_HEIGHT / self.steps_per_hour

    @property
    def start_hour_24(self) -> int:
        return start_hour_24(self.start_hour, self.meridiem, self.use_24h)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ScheduleConfig":
        """Build from a payload ``cfg`` block; missing keys take the defaults."""
        if not isinstance(d, Mapping):
            raise ConfigError(f"cfg must be an object/dict; got {type(d).__name__}")

        known = set(cls.__dataclass_fields__)
        unknown = sorted(k for k in d if k not in known)
        if unknown:
            raise ConfigError(f"unknown cfg keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for k in ("operating_hours", "start_hour", "time_step"):
            if k in d:
                v = d[k]
                if not isinstance(v, int) or isinstance(v, bool):
                    raise ConfigError(f"{k} must be int; got {v!r}")
                kwargs[k] = v
        if "meridiem" in d:
            kwargs["meridiem"] = str(d["meridiem"]).upper()
        for k in ("use_24h", "smart_placement", "restrict_vertical"):
            if k in d:
                if not isinstance(d[k], bool):
                    raise ConfigError(f"{k} must be bool; got {d[k]!r}")
                kwargs[k] = d[k]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operating_hours": self.operating_hours,
            "start_hour": self.start_hour,
            "meridiem": self.meridiem,
            "time_step": self.time_step,
            "use_24h": self.use_24h,
            "smart_placement": self.smart_placement,
            "restrict_vertical": self.restrict_vertical,
        }


def start_hour_24(start_hour: int, meridiem: str, use_24h: bool) -> int:
    if use_24h:
        return start_hour
    if meridiem == "AM":
        return 0 if start_hour == 12 else start_hour
    return 12 if start_hour == 12 else start_hour + 12


def with_operating_hours(cfg: ScheduleConfig, operating_hours: int) -> ScheduleConfig:
    """Switch the visible span. A full-day view has no start offset, so it starts at midnight."""
    start = 0 if operating_hours == 24 else DEFAULT_START_HOUR
    if not cfg.use_24h:
        # 12h mode has no hour 0: midnight is 12 AM.
        return replace(cfg, operating_hours=operating_hours, start_hour=start or 12, meridiem="AM")
    return replace(cfg, operating_hours=operating_hours, start_hour=start)


def with_time_format(cfg: ScheduleConfig, use_24h: bool) -> ScheduleConfig:
    """Toggle 12h/24h input while keeping the same first displayed hour."""
    if use_24h == cfg.use_24h:
        return cfg
    h24 = cfg.start_hour_24
    if use_24h:
        return replace(cfg, use_24h=True, start_hour=h24, meridiem="AM")
    meridiem = "AM" if h24 < 12 else "PM"
    return replace(cfg, use_24h=False, start_hour=(h24 % 12) or 12, meridiem=meridiem)
