"""Duration of a span of consecutive cues, for group headers and countdowns."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..shared.types import CueId
from .clock import add_ms, ms_between
from .timestamp_types import Timestamp


@dataclass(frozen=True)
class SpanMoment:
    """Live override for one cue: ``left`` ms remain on ``cue_id``."""
    cue_id: CueId
    left: int


def get_timestamp_span_duration(
    timestamps: Sequence[Timestamp],
    moment: SpanMoment | None = None,
) -> int | None:
    """
    Signed duration across a span of cues, in ms.

    Sums the actual durations of ``timestamps``; the cue named by ``moment``
    contributes ``abs(moment.left)`` instead of its duration. The result is
    measured from the end of the span back to the first cue's start, so it is
    negative for a non-empty span (a countdown value).

    Returns:
        ``None`` for an empty span
    """
    if not timestamps:
        return None

    first = timestamps[0]
    total = 0
    for timestamp in timestamps:
        if moment is not None and moment.cue_id == timestamp.id:
            total += abs(moment.left)
        else:
            total += timestamp.actual.duration

    return ms_between(add_ms(first.actual.start, total), first.actual.start)
