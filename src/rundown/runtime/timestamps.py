"""
Timestamp engine.

Computes two parallel timelines for a rundown:

- **original**: the locked-in schedule. Cues cascade from the configured
  start, using the durations snapshotted when the show started.
- **actual**: what happened plus what is projected to happen. Elapsed cues
  keep their recorded spans, the active cue grows with ``now``, and the rest
  cascade from the live end of the previous cue.

Both timelines honor fixed-start cues, push a fixed cue that would overlap its
predecessor to ``previous_end + OVERLAP_TOLERANCE``, and carry a calendar-day
offset (``days_plus``) computed in the rundown timezone.

Everything here is a pure function of its arguments; the engine is meant to be
re-run on every tick.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta

from ..domain.entities import Cue, CueOrderItem, Rundown, Runner
from ..infra.exceptions import TimestampsError
from ..infra.logging import get_logger
from ..shared.types import CueId, CueRunState, RunnerState
from .clock import RundownClock, ensure_aware, ms_between
from .constants import OVERLAP_TOLERANCE
from .cue_order import get_sorted_cues
from .runner_state import determine_cue_run_state, get_runner_state
from .timestamp_types import StartDuration, Timestamp, Timestamps

_log = get_logger(__name__)


def create_timestamps(
    cues: Sequence[Cue],
    cue_order: Sequence[CueOrderItem],
    runner: Runner | None,
    start_time: datetime,
    *,
    timezone: str | None = None,
    now: datetime | None = None,
    overlap_tolerance_ms: int | None = None,
) -> Timestamps:
    """
    Create timestamps from rundown and runner data.

    Args:
        cues: All rows of the rundown, in storage order
        cue_order: Hierarchical run order of the rows
        runner: Live runner record, ``None`` before the show starts
        start_time: Configured start of the rundown
        timezone: IANA timezone for calendar math (default from settings)
        now: Current instant (default: the current UTC time)
        overlap_tolerance_ms: Override of the configured overlap tolerance

    Returns:
        Timestamps with one entry per timed cue, in run order

    Raises:
        TimestampsError: If ``now`` or ``start_time`` is not a datetime, or
            the cue order yields no timed cues
    """
    clock = RundownClock(timezone)
    if now is None:
        now = clock.now_utc()
    if not isinstance(now, datetime):
        raise TimestampsError("`now` must be a datetime instance")
    if not isinstance(start_time, datetime):
        raise TimestampsError("`start_time` must be a datetime instance")
    now = ensure_aware(now)
    start_time = ensure_aware(start_time)
    tolerance = (
        OVERLAP_TOLERANCE if overlap_tolerance_ms is None else timedelta(milliseconds=overlap_tolerance_ms)
    )

    # Remember the original cue index
    cue_index_map = {cue.id: index for index, cue in enumerate(cues)}

    sorted_cues = get_sorted_cues(cues, cue_order)
    if not sorted_cues:
        raise TimestampsError("Rundown has no cues to time")

    runner_state = get_runner_state(runner)
    actual_show_start = _resolve_actual_show_start(start_time, runner, now)
    # Same configured time of day, on the day the show actually started
    original_show_start = clock.apply_date(start_time, clock.day_of(actual_show_start))

    _log.debug(
        "create_timestamps",
        cue_count=len(sorted_cues),
        runner_state=runner_state.value,
        timezone=str(clock.tz),
        actual_show_start=actual_show_start,
        original_show_start=original_show_start,
    )

    sorted_cue_ids = [cue.id for cue in sorted_cues]
    run_states = {
        cue.id: determine_cue_run_state(cue.id, runner, sorted_cue_ids) for cue in sorted_cues
    }

    original_start_durations = create_original_start_durations(
        sorted_cues,
        runner,
        original_show_start,
        clock=clock,
        tolerance=tolerance,
    )
    if runner is None:
        actual_start_durations = dict(original_start_durations)
    else:
        actual_start_durations = create_actual_start_durations(
            sorted_cues,
            runner,
            run_states,
            actual_show_start,
            original_show_start,
            now=now,
            clock=clock,
            tolerance=tolerance,
        )

    return Timestamps(
        original=calculate_total_start_duration(original_start_durations),
        actual=calculate_total_start_duration(actual_start_durations),
        cues={
            cue.id: Timestamp(
                id=cue.id,
                index=cue_index_map[cue.id],
                state=run_states[cue.id],
                original=original_start_durations[cue.id],
                actual=actual_start_durations[cue.id],
            )
            for cue in sorted_cues
        },
    )


def create_rundown_timestamps(
    rundown: Rundown,
    *,
    now: datetime | None = None,
    timezone: str | None = None,
) -> Timestamps:
    """Convenience: :func:`create_timestamps` for a loaded :class:`Rundown`."""
    return create_timestamps(
        rundown.cues,
        rundown.cue_order,
        rundown.runner,
        rundown.start_time,
        timezone=timezone or rundown.timezone,
        now=now,
    )


def _resolve_actual_show_start(start_time: datetime, runner: Runner | None, now: datetime) -> datetime:
    """
    When the show actually started.

    Fallback order: configured start (pre-show), earliest elapsed record,
    kickoff of the current cue, ``now``. The elapsed map is keyed by cue id
    and its iteration order carries no meaning.
    """
    if runner is None:
        return start_time
    if runner.elapsed_cues:
        return min(ensure_aware(elapsed.start_time) for elapsed in runner.elapsed_cues.values())
    if runner.timesnap.kickoff is not None:
        return ensure_aware(runner.timesnap.kickoff)
    return now


def _cascade(
    cue: Cue,
    duration: int,
    previous_end: datetime,
    show_start: datetime,
    *,
    clock: RundownClock,
    tolerance: timedelta,
) -> StartDuration:
    """Place ``cue`` after ``previous_end``, honoring a fixed start."""
    hard_start = None
    if cue.is_fixed:
        hard_start = clock.apply_date_plus(
            cue.start_time,  # type: ignore[arg-type]
            clock.day_of(show_start),
            cue.start_date_plus or 0,
        )

    start = hard_start or previous_end
    if start < previous_end:
        _log.debug("overlap_pushed", cue_id=cue.id, requested_start=start, previous_end=previous_end)
        start = previous_end + tolerance

    if hard_start is not None:
        days_plus = cue.start_date_plus or 0
    else:
        days_plus = clock.calendar_days_between(start, show_start)

    return StartDuration(start=start, duration=duration, days_plus=days_plus)


def create_original_start_durations(
    cues: Sequence[Cue],
    runner: Runner | None,
    show_start: datetime,
    *,
    clock: RundownClock,
    tolerance: timedelta = OVERLAP_TOLERANCE,
) -> dict[CueId, StartDuration]:
    """
    Original (locked-in) span of each cue, keyed by cue id in run order.

    Durations come from the runner's original snapshot when it has one for
    the cue, otherwise from the cue itself.
    """
    original_cues = runner.original_cues if runner is not None else {}
    sd_map: dict[CueId, StartDuration] = {}
    previous_end = show_start

    for cue in cues:
        original_cue = original_cues.get(cue.id)
        duration = original_cue.duration if original_cue is not None else cue.duration
        item = _cascade(cue, duration or 0, previous_end, show_start, clock=clock, tolerance=tolerance)
        previous_end = item.end
        sd_map[cue.id] = item

    return sd_map


def create_actual_start_durations(
    cues: Sequence[Cue],
    runner: Runner,
    run_states: Mapping[CueId, CueRunState],
    show_start: datetime,
    day_anchor: datetime,
    *,
    now: datetime,
    clock: RundownClock,
    tolerance: timedelta = OVERLAP_TOLERANCE,
) -> dict[CueId, StartDuration]:
    """
    Actual (live) span of each cue, keyed by cue id in run order.

    Args:
        cues: Timed cues in run order
        runner: Live runner record
        run_states: Run state of every cue in ``cues``
        show_start: When the show actually started; seeds the cascade
        day_anchor: Instant whose calendar day fixed starts and day offsets
            are measured from
        now: Current instant; the active cue extends at least to it

    Raises:
        TimestampsError: If the active cue has no kickoff instant
    """
    timesnap = runner.timesnap
    sd_map: dict[CueId, StartDuration] = {}
    previous_end = show_start

    for cue in cues:
        state = run_states[cue.id]
        elapsed_cue = runner.elapsed_cues.get(cue.id)

        if state is CueRunState.CUE_PAST and elapsed_cue is not None:
            # Recorded history is never recomputed
            start = ensure_aware(elapsed_cue.start_time)
            item = StartDuration(
                start=start,
                duration=elapsed_cue.duration,
                days_plus=clock.calendar_days_between(start, day_anchor),
            )
        elif state is CueRunState.CUE_ACTIVE:
            if timesnap.kickoff is None:
                raise TimestampsError("Active cue has no kickoff", cue_id=cue.id)
            kickoff = ensure_aware(timesnap.kickoff)
            deadline = ensure_aware(timesnap.deadline) if timesnap.deadline is not None else now
            item = StartDuration(
                start=kickoff,
                duration=ms_between(kickoff, max(now, deadline)),
                days_plus=clock.calendar_days_between(kickoff, day_anchor),
            )
        elif state is CueRunState.CUE_PAST:
            # Skipped by a jump: takes no time
            item = StartDuration(
                start=previous_end,
                duration=0,
                days_plus=clock.calendar_days_between(previous_end, day_anchor),
            )
        else:
            item = _cascade(cue, cue.duration or 0, previous_end, day_anchor, clock=clock, tolerance=tolerance)

        previous_end = item.end
        sd_map[cue.id] = item

    return sd_map


def calculate_total_start_duration(spans: Mapping[CueId, StartDuration]) -> StartDuration:
    """
    Overall span from the first span's start to the last span's end.

    Raises:
        TimestampsError: If ``spans`` is empty
    """
    if not spans:
        raise TimestampsError("Cannot aggregate an empty set of spans")
    items = list(spans.values())
    first, last = items[0], items[-1]
    return StartDuration(start=first.start, duration=ms_between(first.start, last.end), days_plus=0)
