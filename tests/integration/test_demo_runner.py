"""
End-to-end test of the demo runner script.

Loads ``scripts/demo_runner.py`` by path and replays every scenario
through the real rule library, checking the printed alerts.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest
import structlog

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "demo_runner.py"


@pytest.fixture(scope="module")
def demo_runner() -> ModuleType:
    spec = importlib.util.spec_from_file_location("demo_runner", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestDemoRunner:
    """Tests for the demo runner CLI."""

    def test_list(self, demo_runner, capsys) -> None:
        assert demo_runner.main(["--list"]) == 0
        out = capsys.readouterr().out
        for key in ("dnc-request", "dnc-listed", "consent-revocation", "missing-disclosures", "prerecorded"):
            assert key in out

    def test_unknown_scenario(self, demo_runner, capsys) -> None:
        assert demo_runner.main(["no-such-call"]) == 1
        assert "Unknown scenario" in capsys.readouterr().err

    def test_default_scenario(self, demo_runner, capsys) -> None:
        assert demo_runner.main([]) == 0
        out = capsys.readouterr().out
        assert "ALERT [DNC-001]" in out
        assert "ALERT [DNC-002]" in out
        assert "2 alert(s) raised" in out

    @pytest.mark.parametrize(
        ("scenario", "rule_id"),
        [
            ("dnc-listed", "DNC-003"),
            ("consent-revocation", "CONS-001"),
            ("prerecorded", "PREC-001"),
        ],
    )
    def test_scenario_alerts(self, demo_runner, capsys, scenario: str, rule_id: str) -> None:
        assert demo_runner.main([scenario]) == 0
        assert f"ALERT [{rule_id}]" in capsys.readouterr().out

    def test_missing_rules_file(self, demo_runner, capsys, tmp_path: Path) -> None:
        assert demo_runner.main(["--rules", str(tmp_path / "absent.json")]) == 1
        assert "cannot read" in capsys.readouterr().err
