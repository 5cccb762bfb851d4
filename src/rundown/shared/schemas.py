"""
Pydantic schemas for timestamp serialization.

These models describe the JSON shape of engine results as handed to UI and
CLI consumers: camelCase keys, ISO-8601 instants, durations in milliseconds.
They validate straight from the engine's dataclasses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .types import CueRunState, GroupRunState, RunnerState


class StartDurationRead(BaseModel):
    """Schema for one computed span."""

    start: datetime
    duration: int = Field(..., description="Duration in milliseconds")
    days_plus: int = Field(0, serialization_alias="daysPlus", description="Calendar-day offset from show start")

    model_config = ConfigDict(from_attributes=True)


class TimestampRead(BaseModel):
    """Schema for the timestamp of a single cue."""

    id: str
    index: int = Field(..., ge=0, description="Position in the unflattened cue list")
    state: CueRunState
    original: StartDurationRead
    actual: StartDurationRead

    model_config = ConfigDict(from_attributes=True)


class TimestampsRead(BaseModel):
    """Schema for the timestamps of a whole rundown."""

    original: StartDurationRead
    actual: StartDurationRead
    cues: dict[str, TimestampRead] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class RunnerStateRead(BaseModel):
    """Schema for the phase of a show."""

    state: RunnerState


class GroupTimestampsRead(BaseModel):
    """Schema for a group's children and their combined span."""

    group_id: str = Field(..., serialization_alias="groupId")
    state: GroupRunState
    span_duration: int | None = Field(
        None, serialization_alias="spanDuration", description="Signed span duration in milliseconds"
    )
    children: list[TimestampRead] = Field(default_factory=list)
