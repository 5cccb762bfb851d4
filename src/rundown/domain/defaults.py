"""
Default builders for rundown entities.

Each builder returns a fully-populated entity; callers override fields with
``dataclasses.replace``. Nothing here reads global mutable state apart from
the configured default timezone.
"""

from __future__ import annotations

from datetime import datetime, time
from types import MappingProxyType

from ..runtime.clock import RundownClock, ensure_aware
from ..runtime.constants import DEFAULT_RUNDOWN_END, DEFAULT_RUNDOWN_START
from ..shared.types import CueStartMode, CueType, RundownStatus
from .entities import Cue, Rundown, Runner, Timesnap


def get_cue_defaults(cue_id: str = "") -> Cue:
    """A flexible, zero-length cue with no start time."""
    return Cue(
        id=cue_id,
        type=CueType.CUE,
        title="",
        subtitle="",
        start_time=None,
        start_mode=CueStartMode.FLEXIBLE,
        start_date_plus=0,
        duration=0,
    )


def get_runner_defaults() -> Runner:
    """A runner with no active cue and no history."""
    return Runner(
        timesnap=Timesnap(cue_id=None, running=False, kickoff=None, last_stop=None, deadline=None),
        next_cue_id=None,
        original_cues=MappingProxyType({}),
        elapsed_cues=MappingProxyType({}),
    )


def _at_local(clock: RundownClock, now: datetime, hhmmss: str) -> datetime:
    wall = time.fromisoformat(hhmmss)
    return ensure_aware(datetime.combine(clock.day_of(now), wall, tzinfo=clock.tz))


def get_rundown_defaults(now: datetime | None = None, timezone: str | None = None) -> Rundown:
    """
    An empty draft rundown running 09:00-10:00 on the day of ``now``.

    Args:
        now: Reference instant (default: the current UTC time)
        timezone: Timezone the 09:00/10:00 wall times are read in
    """
    clock = RundownClock(timezone)
    now = now or clock.now_utc()
    return Rundown(
        name="",
        start_time=_at_local(clock, now, DEFAULT_RUNDOWN_START),
        end_time=_at_local(clock, now, DEFAULT_RUNDOWN_END),
        timezone=timezone,
        status=RundownStatus.DRAFT,
        cues=(),
        cue_order=(),
        runner=None,
    )
