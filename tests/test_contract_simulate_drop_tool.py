from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE = REPO_ROOT / "tests" / "fixtures" / "sample_day.json"


def _run(*args: str) -> subprocess.CompletedProcess:
    cmd = [sys.executable, "-m", "daygrid.tools.simulate_drop", "--in", str(FIXTURE), *args]
    return subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)


class TestSimulateDropToolContract:
    def test_smart_drop_moves_next_to_conflict(self, tmp_path: Path):
        out_json = tmp_path / "after.json"
        p = _run("--id", "a1", "--to", "09:45", "--out", str(out_json), "--json")
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        assert p.returncode == 0, combined

        summary = json.loads(p.stdout.strip().splitlines()[-1])
        assert summary["reason"] == "committed"
        assert summary["desired"] == "09:45"
        assert summary["to"] == "09:30"
        assert summary["path"] == "preferred"
        assert summary["resolved"] is True

        out = json.loads(out_json.read_text(encoding="utf-8"))
        starts = {a["id"]: a["start"] for p_ in out["patients"] for a in p_["appointments"]}
        assert starts["a1"] == "2025-03-02T09:30"
        assert starts["b1"] == "2025-03-02T10:00"

    def test_no_smart_rejects(self, tmp_path: Path):
        p = _run("--id", "a1", "--to", "09:45", "--no-smart")
        assert p.returncode == 1, p.stderr
        assert "rejected" in p.stdout
        assert "09:00 -> 09:00" in p.stdout

    def test_pixel_delta_and_no_target(self):
        p = _run("--id", "a1", "--delta-px", "-96", "--json")
        assert p.returncode == 0, p.stderr
        assert json.loads(p.stdout)["to"] == "08:30"

        p = _run("--id", "a1", "--delta-px", "-96", "--no-target")
        assert p.returncode == 1, p.stderr
        assert "no_target" in p.stdout

    def test_unknown_id_is_an_input_error(self):
        p = _run("--id", "zzz", "--to", "09:45")
        assert p.returncode == 2
        assert "Unknown appointment id" in p.stderr

    def test_bad_time(self):
        p = _run("--id", "a1", "--to", "25:00")
        assert p.returncode == 2
        assert "Invalid HH:MM" in p.stderr
