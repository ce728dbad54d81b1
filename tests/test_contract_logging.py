from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from daygrid.log import configure_logging, get_logger

REPO_ROOT = Path(__file__).resolve().parents[1]


class TestLoggingContract:
    def teardown_method(self, method):
        configure_logging("WARNING", json_logs=False)

    def test_unknown_level_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")

    def test_json_lines_on_stderr(self, capsys):
        configure_logging("INFO", json_logs=True)
        get_logger("daygrid.test").info("drag.start", appointment_id="a1")

        captured = capsys.readouterr()
        assert captured.out == ""
        rec = json.loads(captured.err.strip().splitlines()[-1])
        assert rec["event"] == "drag.start"
        assert rec["appointment_id"] == "a1"
        assert rec["level"] == "info"
        assert rec["logger"] == "daygrid.test"

    def test_level_from_env(self, capsys, monkeypatch):
        monkeypatch.setenv("DAYGRID_LOG_LEVEL", "error")
        configure_logging(json_logs=True)
        log = get_logger("daygrid.test")
        log.warning("placement.unresolved")
        log.error("boom")

        lines = [ln for ln in capsys.readouterr().err.splitlines() if ln.strip()]
        events = [json.loads(ln)["event"] for ln in lines]
        assert events == ["boom"]

    def test_importing_the_engine_leaves_structlog_unconfigured(self):
        code = (
            "import structlog\n"
            "import daygrid, daygrid.drag, daygrid.placement\n"
            "print(structlog.is_configured())\n"
        )
        p = subprocess.run([sys.executable, "-c", code], cwd=str(REPO_ROOT), capture_output=True, text=True)
        assert p.returncode == 0, p.stderr
        assert p.stdout.strip() == "False"
