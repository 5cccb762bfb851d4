"""
Cue order queries.

The rundown's cue order is a two-level tree: top-level items, some of which
are groups holding one level of children. These helpers turn it into the flat
run order used by the timeline builders, and look up a group's children.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..domain.entities import Cue, CueOrderItem
from ..shared.types import CueId, CueType
from .timestamp_types import Timestamp, Timestamps


def get_sorted_cues(cues: Iterable[Cue], cue_order: Sequence[CueOrderItem]) -> list[Cue]:
    """
    Flatten ``cue_order`` into the list of timed cues in run order.

    Group children are inlined in place, depth-first. Only ``type == cue``
    rows are returned; ids in the order with no matching cue are skipped, and
    cues missing from the order are dropped. Nesting below the first level is
    ignored.
    """
    cue_map = {cue.id: cue for cue in cues}
    sorted_cues: list[Cue] = []

    def take(item: CueOrderItem) -> None:
        cue = cue_map.get(item.id)
        if cue is not None and cue.type == CueType.CUE:
            sorted_cues.append(cue)

    for item in cue_order:
        take(item)
        for child in item.children or ():
            take(child)

    return sorted_cues


def get_children_timestamps(
    parent_id: CueId,
    timestamps: Timestamps,
    cue_order: Sequence[CueOrderItem],
) -> list[Timestamp]:
    """
    Timestamps of a group's children, in cue order.

    Returns an empty list when the parent is unknown or has no children.
    Children without a timestamp (headings, unknown ids) are left out.
    """
    children_timestamps: list[Timestamp] = []

    for item in cue_order:
        if item.id != parent_id:
            continue
        for child in item.children or ():
            timestamp = timestamps.cues.get(child.id)
            if timestamp is not None:
                children_timestamps.append(timestamp)

    return children_timestamps
