"""
Runtime constants for the timestamp engine.

The overlap tolerance is the gap inserted after a cue when the next cue's
fixed start would otherwise land inside it. A non-zero gap keeps a pushed
fixed cue distinguishable from a plain zero-gap cascade.
Override via RUNDOWN_OVERLAP_TOLERANCE_MS.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..infra.settings import settings

OVERLAP_TOLERANCE_MS = settings.overlap_tolerance_ms

if OVERLAP_TOLERANCE_MS > 60_000:
    logging.getLogger(__name__).warning(
        "OVERLAP_TOLERANCE_MS (%s) is unusually high. Pushed fixed cues will drift visibly.",
        OVERLAP_TOLERANCE_MS,
    )

OVERLAP_TOLERANCE = timedelta(milliseconds=OVERLAP_TOLERANCE_MS)

# Defaults applied to incomplete cue data
DEFAULT_CUE_DURATION_MS = 0
DEFAULT_START_DATE_PLUS = 0

# Default rundown window (local time of day)
DEFAULT_RUNDOWN_START = "09:00:00"
DEFAULT_RUNDOWN_END = "10:00:00"
