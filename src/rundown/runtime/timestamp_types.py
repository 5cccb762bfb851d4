"""
Timestamp result types.

Canonical output structures of the timestamp engine. Callers and tests
MUST import from this module, not redefine locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..shared.schemas import StartDurationRead, TimestampRead, TimestampsRead
from ..shared.types import CueId, CueRunState
from .clock import add_ms


@dataclass(frozen=True)
class StartDuration:
    """
    One computed time span.

    ``days_plus`` is the calendar-day offset of ``start`` from the show's
    nominal start day.
    """
    start: datetime
    duration: int  # ms
    days_plus: int = 0

    @property
    def end(self) -> datetime:
        """Instant at which the span ends."""
        return add_ms(self.start, self.duration)

    def to_dict(self) -> dict[str, Any]:
        return StartDurationRead.model_validate(self).model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class Timestamp:
    """Per-cue result: run state plus original and actual spans."""
    id: CueId
    index: int  # position in the unflattened cue list
    state: CueRunState
    original: StartDuration
    actual: StartDuration

    def to_dict(self) -> dict[str, Any]:
        return TimestampRead.model_validate(self).model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class Timestamps:
    """
    Timestamps of a whole rundown.

    ``cues`` iterates in run order (flattened cue order).
    """
    original: StartDuration
    actual: StartDuration
    cues: dict[CueId, Timestamp]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-ready primitives (camelCase keys, ISO instants)."""
        return TimestampsRead.model_validate(self).model_dump(mode="json", by_alias=True)
