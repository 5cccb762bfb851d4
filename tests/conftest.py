"""
Global test configuration for rundown.

This module provides global pytest configuration and shared fixtures: the
three-cue rundown used across the engine tests and a CLI runner.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from rundown.domain.entities import Cue, CueOrderItem  # noqa: E402
from rundown.shared.types import CueStartMode, CueType  # noqa: E402

MINUTE = 60_000


@pytest.fixture
def start_time() -> datetime:
    return datetime(2024, 7, 26, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_cue():
    """Factory for cues with sensible defaults."""

    def _make_cue(
        cue_id: str,
        minutes: float = 0,
        *,
        start_time: datetime | None = None,
        fixed: bool = False,
        start_date_plus: int = 0,
        cue_type: CueType = CueType.CUE,
    ) -> Cue:
        return Cue(
            id=cue_id,
            type=cue_type,
            title=f"Cue {cue_id}",
            start_time=start_time,
            start_mode=CueStartMode.FIXED if fixed else CueStartMode.FLEXIBLE,
            start_date_plus=start_date_plus,
            duration=int(minutes * MINUTE),
        )

    return _make_cue


@pytest.fixture
def default_cues(make_cue) -> list[Cue]:
    """Cues #1/#2/#3 running 5, 10 and 15 minutes."""
    return [make_cue("#1", 5), make_cue("#2", 10), make_cue("#3", 15)]


@pytest.fixture
def default_cue_order() -> list[CueOrderItem]:
    return [CueOrderItem(id="#1"), CueOrderItem(id="#2"), CueOrderItem(id="#3")]


@pytest.fixture
def run_cli():
    """Run the rundown CLI with Typer's CliRunner; returns (exit_code, output)."""
    from typer.testing import CliRunner

    from rundown.cli.main import app

    runner = CliRunner()

    def _run(args: list[str]) -> tuple[int, str]:
        result = runner.invoke(app, args)
        return result.exit_code, result.output

    return _run
