"""Signed span duration across consecutive cues."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from rundown.runtime.span import SpanMoment, get_timestamp_span_duration
from rundown.runtime.timestamp_types import StartDuration, Timestamp
from rundown.shared.types import CueRunState

BASE = datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc)


def ts(cue_id: str, offset_ms: int, duration: int) -> Timestamp:
    span = StartDuration(BASE + timedelta(milliseconds=offset_ms), duration, 0)
    return Timestamp(id=cue_id, index=0, state=CueRunState.CUE_FUTURE, original=span, actual=span)


SPAN = [ts("cue1", 0, 5000), ts("cue2", 5000, 3000), ts("cue3", 8000, 2000)]


def test_empty_span_is_none():
    assert get_timestamp_span_duration([]) is None


def test_sum_of_durations_is_negative():
    assert get_timestamp_span_duration(SPAN) == -10_000


def test_single_timestamp():
    assert get_timestamp_span_duration([ts("cue1", 0, 5000)]) == -5000


def test_moment_replaces_duration_of_its_cue():
    assert get_timestamp_span_duration(SPAN, SpanMoment(cue_id="cue2", left=6000)) == -13_000


def test_moment_left_is_absolute():
    assert get_timestamp_span_duration(SPAN[:2], SpanMoment(cue_id="cue2", left=-4000)) == -9000


def test_moment_for_other_cue_is_ignored():
    assert get_timestamp_span_duration(SPAN[:2], SpanMoment(cue_id="nope", left=4000)) == -8000


def test_zero_durations():
    assert get_timestamp_span_duration([ts("a", 0, 0), ts("b", 0, 0)]) == 0
