"""
Rundown timestamps.

Computes the original (locked-in) and actual (live) timelines of a show
rundown, plus the run state of every cue, from a rundown snapshot and the
live runner record.
"""

from .domain.defaults import get_cue_defaults, get_rundown_defaults, get_runner_defaults
from .domain.entities import (
    Cue,
    CueOrderItem,
    ElapsedCue,
    OriginalCue,
    Rundown,
    Runner,
    Timesnap,
)
from .infra.exceptions import RundownError, TimestampsError, ValidationError
from .runtime.clock import RundownClock
from .runtime.cue_order import get_children_timestamps, get_sorted_cues
from .runtime.runner_state import (
    determine_cue_run_state,
    determine_group_run_state,
    get_runner_state,
)
from .runtime.span import SpanMoment, get_timestamp_span_duration
from .runtime.timestamp_types import StartDuration, Timestamp, Timestamps
from .runtime.timestamps import (
    calculate_total_start_duration,
    create_actual_start_durations,
    create_original_start_durations,
    create_rundown_timestamps,
    create_timestamps,
)
from .shared.types import (
    CueRunState,
    CueStartMode,
    CueType,
    GroupRunState,
    RundownStatus,
    RunnerState,
)

__all__ = [
    # Engine
    "create_timestamps",
    "create_rundown_timestamps",
    "create_original_start_durations",
    "create_actual_start_durations",
    "calculate_total_start_duration",
    "get_sorted_cues",
    "get_children_timestamps",
    "get_runner_state",
    "determine_cue_run_state",
    "determine_group_run_state",
    "get_timestamp_span_duration",
    "SpanMoment",
    "RundownClock",
    # Entities
    "Cue",
    "CueOrderItem",
    "Timesnap",
    "OriginalCue",
    "ElapsedCue",
    "Runner",
    "Rundown",
    "StartDuration",
    "Timestamp",
    "Timestamps",
    # Defaults
    "get_cue_defaults",
    "get_runner_defaults",
    "get_rundown_defaults",
    # Enums
    "CueType",
    "CueStartMode",
    "RunnerState",
    "CueRunState",
    "GroupRunState",
    "RundownStatus",
    # Exceptions
    "RundownError",
    "ValidationError",
    "TimestampsError",
]
