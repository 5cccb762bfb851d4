"""
Runner state classifier tests.

Show phase from the runner, and per-cue run state including the NEXT-before-PAST
precedence that allows an operator to queue an earlier cue.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from rundown.domain.entities import Runner, Timesnap
from rundown.runtime.runner_state import (
    determine_cue_run_state,
    determine_group_run_state,
    get_runner_state,
)
from rundown.runtime.timestamp_types import StartDuration, Timestamp
from rundown.shared.types import CueRunState, GroupRunState, RunnerState

CUE_IDS = ["a", "b", "c", "d"]


def runner_on(cue_id: str | None, next_cue_id: str | None = None) -> Runner:
    return Runner(timesnap=Timesnap(cue_id=cue_id, running=cue_id is not None), next_cue_id=next_cue_id)


class TestGetRunnerState:

    def test_no_runner_is_preshow(self):
        assert get_runner_state(None) is RunnerState.PRESHOW

    def test_no_active_cue_is_ended(self):
        assert get_runner_state(runner_on(None)) is RunnerState.ENDED

    def test_active_cue_is_onair(self):
        assert get_runner_state(runner_on("b")) is RunnerState.ONAIR


class TestDetermineCueRunState:

    def test_everything_future_without_runner(self):
        assert {determine_cue_run_state(c, None, CUE_IDS) for c in CUE_IDS} == {CueRunState.CUE_FUTURE}

    def test_everything_past_when_ended(self):
        runner = runner_on(None, next_cue_id="a")
        assert {determine_cue_run_state(c, runner, CUE_IDS) for c in CUE_IDS} == {CueRunState.CUE_PAST}

    @pytest.mark.parametrize(
        "cue_id,expected",
        [
            ("a", CueRunState.CUE_PAST),
            ("b", CueRunState.CUE_ACTIVE),
            ("c", CueRunState.CUE_NEXT),
            ("d", CueRunState.CUE_FUTURE),
        ],
    )
    def test_positional_states(self, cue_id, expected):
        runner = runner_on("b", next_cue_id="c")
        assert determine_cue_run_state(cue_id, runner, CUE_IDS) is expected

    def test_next_wins_over_past(self):
        """A cue queued as next reports NEXT even when it sits before the active cue."""
        runner = runner_on("c", next_cue_id="a")
        assert determine_cue_run_state("a", runner, CUE_IDS) is CueRunState.CUE_NEXT
        assert determine_cue_run_state("b", runner, CUE_IDS) is CueRunState.CUE_PAST

    def test_active_cue_outside_order_marks_nothing_past(self):
        runner = runner_on("zzz")
        assert [determine_cue_run_state(c, runner, CUE_IDS) for c in CUE_IDS] == [CueRunState.CUE_FUTURE] * 4


class TestDetermineGroupRunState:

    @staticmethod
    def child(cue_id: str, state: CueRunState) -> Timestamp:
        span = StartDuration(datetime(2024, 7, 26, 9, tzinfo=timezone.utc), 0, 0)
        return Timestamp(id=cue_id, index=0, state=state, original=span, actual=span)

    def test_active_child_makes_group_active(self):
        children = [self.child("a", CueRunState.CUE_PAST), self.child("b", CueRunState.CUE_ACTIVE)]
        assert determine_group_run_state(children) is GroupRunState.GROUP_ACTIVE

    def test_all_children_past(self):
        children = [self.child("a", CueRunState.CUE_PAST), self.child("b", CueRunState.CUE_PAST)]
        assert determine_group_run_state(children) is GroupRunState.GROUP_PAST

    def test_otherwise_future(self):
        children = [self.child("a", CueRunState.CUE_PAST), self.child("b", CueRunState.CUE_NEXT)]
        assert determine_group_run_state(children) is GroupRunState.GROUP_FUTURE
        assert determine_group_run_state([]) is GroupRunState.GROUP_FUTURE
