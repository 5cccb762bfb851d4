"""
Shared types and enums for rundown.

This module contains common types and enums that are used across
the domain, runtime, and CLI layers.
"""

from __future__ import annotations

from enum import Enum


class CueType(str, Enum):
    """Kinds of rows in a rundown. Only ``CUE`` takes part in timing."""

    CUE = "cue"
    HEADING = "heading"
    GROUP = "group"


class CueStartMode(str, Enum):
    """How a cue's start is determined."""

    FIXED = "fixed"  # pinned to the cue's wall-clock start_time
    FLEXIBLE = "flexible"  # floats after the previous cue


class RunnerState(str, Enum):
    """Phase of the whole show."""

    PRESHOW = "PRESHOW"
    ONAIR = "ONAIR"
    ENDED = "ENDED"


class CueRunState(str, Enum):
    """Run state of a single cue relative to the runner."""

    CUE_PAST = "CUE_PAST"
    CUE_ACTIVE = "CUE_ACTIVE"
    CUE_NEXT = "CUE_NEXT"
    CUE_FUTURE = "CUE_FUTURE"


class GroupRunState(str, Enum):
    """Run state of a group, derived from its children."""

    GROUP_PAST = "GROUP_PAST"
    GROUP_ACTIVE = "GROUP_ACTIVE"
    GROUP_FUTURE = "GROUP_FUTURE"


class RundownStatus(str, Enum):
    """Editorial status of a rundown."""

    DRAFT = "draft"
    APPROVED = "approved"
    ARCHIVED = "archived"


# Type aliases
CueId = str
