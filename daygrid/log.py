# daygrid/log.py
"""Structured logging for daygrid.

structlog on top of the standard library. Engine modules log through
``get_logger(__name__)`` and never configure structlog themselves; the host
app decides rendering and level, or calls ``configure_logging`` the way the
CLI does.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, List, Optional

import structlog

LOG_LEVEL_ENV = "DAYGRID_LOG_LEVEL"
LOG_JSON_ENV = "DAYGRID_LOG_JSON"


def _env_flag(name: str) -> bool:
    return str(os.getenv(name, "")).strip().lower() in ("1", "true", "yes", "on")


def _processors(json_logs: bool) -> List[Any]:
    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(level: Optional[str] = None, *, json_logs: Optional[bool] = None) -> None:
    """Route daygrid logs to stderr.

    level: DEBUG/INFO/WARNING/ERROR (default: env DAYGRID_LOG_LEVEL or WARNING)
    json_logs: render JSON lines (default: env DAYGRID_LOG_JSON)
    """
    lvl_name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    lvl = getattr(logging, lvl_name, None)
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level: {lvl_name!r}")
    if json_logs is None:
        json_logs = _env_flag(LOG_JSON_ENV)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=lvl, force=True)
    structlog.configure(
        processors=_processors(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)
