from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURES = REPO_ROOT / "tests" / "fixtures"


def _run(*args: str) -> subprocess.CompletedProcess:
    cmd = [sys.executable, "-m", "daywheel.tools.validate_snapshot", *args]
    return subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)


class TestValidateSnapshotToolContract:
    def test_seed_fixture_is_ok(self):
        p = _run("--in", str(FIXTURES / "seed_snapshot.json"))
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        assert p.returncode == 0, combined
        assert "[daywheel-validate-snapshot] OK" in p.stdout

    def test_drifted_fixture_fails_strict_and_passes_lenient(self):
        p = _run("--in", str(FIXTURES / "drifted_snapshot.json"))
        assert p.returncode == 3, p.stderr
        assert "[daywheel-validate-snapshot] FAIL" in p.stderr
        assert "total 1450min" in p.stderr

        p = _run("--lenient", "--in", str(FIXTURES / "drifted_snapshot.json"))
        assert p.returncode == 0, p.stderr

    def test_bad_fixture_lists_errors(self):
        p = _run("--in", str(FIXTURES / "seed_snapshot.json"), "--in", str(FIXTURES / "bad_snapshot.json"))
        assert p.returncode == 3
        assert "bad_snapshot.json: snapshot[0].type" in p.stderr
        assert "seed_snapshot.json" not in p.stderr

    def test_missing_file_is_usage_error(self, tmp_path: Path):
        p = _run("--in", str(tmp_path / "nope.json"))
        assert p.returncode == 2
        assert "[daywheel-validate-snapshot] ERROR: Missing JSON file" in p.stderr

    def test_write_normalized(self, tmp_path: Path):
        out = tmp_path / "out" / "normalized.json"
        p = _run("--lenient", "--in", str(FIXTURES / "drifted_snapshot.json"), "--write-normalized", str(out))
        assert p.returncode == 0, p.stderr
        rows = json.loads(out.read_text(encoding="utf-8"))
        assert [(r["id"], r["duration"]) for r in rows] == [("g1", 50), ("x", 1390)]
