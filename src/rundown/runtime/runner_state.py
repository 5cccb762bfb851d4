"""
Runner state classification.

Derives the phase of the show from the runner, and the run state of every
cue (past/active/next/future) relative to the active cue.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..domain.entities import Runner
from ..shared.types import CueId, CueRunState, GroupRunState, RunnerState
from .timestamp_types import Timestamp


def get_runner_state(runner: Runner | None) -> RunnerState:
    """Determine the current phase of the show.

    Args:
        runner: The runner record, ``None`` before the show starts

    Returns:
        PRESHOW without a runner, ENDED when no cue is active, else ONAIR
    """
    if runner is None:
        return RunnerState.PRESHOW
    if runner.timesnap.cue_id is None:
        return RunnerState.ENDED
    return RunnerState.ONAIR


def _position(cue_id: CueId | None, sorted_cue_ids: Sequence[CueId]) -> int:
    try:
        return sorted_cue_ids.index(cue_id)  # type: ignore[arg-type]
    except ValueError:
        return -1


def determine_cue_run_state(
    cue_id: CueId,
    runner: Runner | None,
    sorted_cue_ids: Sequence[CueId],
) -> CueRunState:
    """
    Determine the run state of one cue.

    The NEXT check comes before the positional PAST check: an operator may
    queue an earlier cue as next ("jump back"), and that cue must report NEXT.
    """
    if runner is None:
        return CueRunState.CUE_FUTURE

    active_id = runner.timesnap.cue_id
    if active_id is None:
        return CueRunState.CUE_PAST

    if cue_id == runner.next_cue_id:
        return CueRunState.CUE_NEXT

    if _position(cue_id, sorted_cue_ids) < _position(active_id, sorted_cue_ids):
        return CueRunState.CUE_PAST

    if cue_id == active_id:
        return CueRunState.CUE_ACTIVE

    return CueRunState.CUE_FUTURE


def determine_group_run_state(children: Sequence[Timestamp]) -> GroupRunState:
    """Run state of a group from its children's timestamps."""
    if any(child.state is CueRunState.CUE_ACTIVE for child in children):
        return GroupRunState.GROUP_ACTIVE
    if children and all(child.state is CueRunState.CUE_PAST for child in children):
        return GroupRunState.GROUP_PAST
    return GroupRunState.GROUP_FUTURE
