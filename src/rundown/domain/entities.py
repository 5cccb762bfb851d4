"""
Rundown snapshot entities.

Canonical input structures for the timestamp engine: the cues of a rundown,
their hierarchical order, and the live runner record. All entities are
frozen; the engine reads them and never writes back.

``from_dict`` constructors accept the camelCase payload shape used by rundown
storage and normalize incomplete data: a missing duration becomes 0, a missing
or unrecognized start mode becomes FLEXIBLE.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from ..infra.exceptions import ValidationError
from ..runtime.clock import ensure_aware
from ..runtime.constants import DEFAULT_CUE_DURATION_MS, DEFAULT_START_DATE_PLUS
from ..shared.types import CueId, CueStartMode, CueType, RundownStatus

# Older snapshots stored fixed starts as "locked"
_START_MODE_ALIASES = {"locked": CueStartMode.FIXED}


def parse_instant(value: Any, *, field_name: str = "instant") -> datetime | None:
    """
    Parse an instant from a snapshot value.

    Accepts aware or naive datetimes (naive is read as UTC), ISO-8601 strings
    (a trailing ``Z`` is allowed) and epoch milliseconds.

    Raises:
        ValidationError: If the value can not be interpreted as an instant
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_aware(datetime.fromisoformat(text))
        except ValueError as e:
            raise ValidationError(f"Invalid {field_name}: {value!r}") from e
    raise ValidationError(f"Invalid {field_name}: {value!r}")


def parse_start_mode(value: Any) -> CueStartMode:
    """Normalize a start mode; anything unrecognized is FLEXIBLE."""
    if isinstance(value, CueStartMode):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _START_MODE_ALIASES:
            return _START_MODE_ALIASES[key]
        try:
            return CueStartMode(key)
        except ValueError:
            pass
    return CueStartMode.FLEXIBLE


def _int_or_default(value: Any, default: int, *, field_name: str) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from e


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _require_id(data: Mapping[str, Any], what: str) -> CueId:
    cue_id = data.get("id")
    if cue_id is None or cue_id == "":
        raise ValidationError(f"{what} is missing an id")
    return str(cue_id)


@dataclass(frozen=True)
class Cue:
    """
    One row of a rundown.

    Only rows with ``type == CueType.CUE`` take part in timing; headings and
    groups are layout.
    """
    id: CueId
    type: CueType = CueType.CUE
    title: str = ""
    subtitle: str = ""
    start_time: datetime | None = None  # wall-clock anchor, used when FIXED
    start_mode: CueStartMode = CueStartMode.FLEXIBLE
    start_date_plus: int = DEFAULT_START_DATE_PLUS  # day offset for multi-day shows
    duration: int = DEFAULT_CUE_DURATION_MS  # ms

    @property
    def is_fixed(self) -> bool:
        """True when the cue is pinned to its own start time."""
        return self.start_mode == CueStartMode.FIXED and self.start_time is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Cue:
        data = _require_mapping(data, "Cue")
        raw_type = data.get("type") or CueType.CUE
        try:
            cue_type = CueType(raw_type)
        except ValueError as e:
            raise ValidationError(f"Unknown cue type: {raw_type!r}") from e
        return cls(
            id=_require_id(data, "Cue"),
            type=cue_type,
            title=data.get("title") or "",
            subtitle=data.get("subtitle") or "",
            start_time=parse_instant(data.get("startTime"), field_name="startTime"),
            start_mode=parse_start_mode(data.get("startMode")),
            start_date_plus=_int_or_default(
                data.get("startDatePlus"), DEFAULT_START_DATE_PLUS, field_name="startDatePlus"
            ),
            duration=_int_or_default(data.get("duration"), DEFAULT_CUE_DURATION_MS, field_name="duration"),
        )


@dataclass(frozen=True)
class CueOrderItem:
    """
    Position of a cue in the rundown.

    Groups carry their children; leaves have ``children=None``. Only one level
    of nesting exists: a child never has children of its own.
    """
    id: CueId
    children: tuple[CueOrderItem, ...] | None = None

    @property
    def is_group(self) -> bool:
        return self.children is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CueOrderItem:
        data = _require_mapping(data, "CueOrderItem")
        children = data.get("children")
        if children is None:
            return cls(id=_require_id(data, "CueOrderItem"))
        # Deeper levels are not part of the model and are dropped here
        return cls(
            id=_require_id(data, "CueOrderItem"),
            children=tuple(
                cls(id=_require_id(_require_mapping(child, "CueOrderItem"), "CueOrderItem"))
                for child in children
            ),
        )


@dataclass(frozen=True)
class Timesnap:
    """The runner's view of the current instant.

    ``cue_id=None`` means the show has ended.
    """
    cue_id: CueId | None = None
    running: bool = False
    kickoff: datetime | None = None  # when the active cue started
    last_stop: datetime | None = None
    deadline: datetime | None = None  # when the active cue is planned to end

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Timesnap:
        data = _require_mapping(data, "Timesnap")
        cue_id = data.get("cueId")
        return cls(
            cue_id=None if cue_id is None else str(cue_id),
            running=bool(data.get("running", False)),
            kickoff=parse_instant(data.get("kickoff"), field_name="kickoff"),
            last_stop=parse_instant(data.get("lastStop"), field_name="lastStop"),
            deadline=parse_instant(data.get("deadline"), field_name="deadline"),
        )


@dataclass(frozen=True)
class OriginalCue:
    """A cue's timing as locked in when the show started."""
    start_time: datetime | None = None
    start_mode: CueStartMode = CueStartMode.FLEXIBLE
    duration: int = DEFAULT_CUE_DURATION_MS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OriginalCue:
        data = _require_mapping(data, "OriginalCue")
        return cls(
            start_time=parse_instant(data.get("startTime"), field_name="startTime"),
            start_mode=parse_start_mode(data.get("startMode")),
            duration=_int_or_default(data.get("duration"), DEFAULT_CUE_DURATION_MS, field_name="duration"),
        )


@dataclass(frozen=True)
class ElapsedCue:
    """What actually happened to a cue that has been run."""
    start_time: datetime
    duration: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ElapsedCue:
        data = _require_mapping(data, "ElapsedCue")
        start_time = parse_instant(data.get("startTime"), field_name="startTime")
        if start_time is None:
            raise ValidationError("ElapsedCue is missing its startTime")
        return cls(
            start_time=start_time,
            duration=_int_or_default(data.get("duration"), DEFAULT_CUE_DURATION_MS, field_name="duration"),
        )


@dataclass(frozen=True)
class Runner:
    """
    Live execution record of a show.

    ``original_cues`` is the snapshot taken when the show started.
    ``elapsed_cues`` is append-only and keyed by cue id; its key order says
    nothing about the order the cues were run in. Both maps are read-only.
    """
    timesnap: Timesnap = field(default_factory=Timesnap)
    next_cue_id: CueId | None = None
    original_cues: Mapping[CueId, OriginalCue] = field(default_factory=lambda: MappingProxyType({}))
    elapsed_cues: Mapping[CueId, ElapsedCue] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Runner:
        data = _require_mapping(data, "Runner")
        next_cue_id = data.get("nextCueId")
        return cls(
            timesnap=Timesnap.from_dict(data.get("timesnap") or {}),
            next_cue_id=None if next_cue_id is None else str(next_cue_id),
            original_cues=MappingProxyType(
                {
                    str(cue_id): OriginalCue.from_dict(item)
                    for cue_id, item in (data.get("originalCues") or {}).items()
                }
            ),
            elapsed_cues=MappingProxyType(
                {
                    str(cue_id): ElapsedCue.from_dict(item)
                    for cue_id, item in (data.get("elapsedCues") or {}).items()
                }
            ),
        )


@dataclass(frozen=True)
class Rundown:
    """Everything needed to compute the timestamps of one show."""
    start_time: datetime
    name: str = ""
    end_time: datetime | None = None
    timezone: str | None = None
    status: RundownStatus = RundownStatus.DRAFT
    cues: tuple[Cue, ...] = ()
    cue_order: tuple[CueOrderItem, ...] = ()
    runner: Runner | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Rundown:
        """
        Deserialize a rundown snapshot (e.g. loaded from JSON).

        Expected shape::

            {"name": "...", "startTime": "2024-07-26T09:00:00Z", "timezone": "UTC",
             "cues": [...], "cueOrder": [...], "runner": {...} | null}
        """
        data = _require_mapping(data, "Rundown")
        start_time = parse_instant(data.get("startTime"), field_name="startTime")
        if start_time is None:
            raise ValidationError("Rundown is missing its startTime")
        raw_status = data.get("status") or RundownStatus.DRAFT
        try:
            status = RundownStatus(raw_status)
        except ValueError as e:
            raise ValidationError(f"Unknown rundown status: {raw_status!r}") from e
        runner = data.get("runner")
        return cls(
            start_time=start_time,
            name=data.get("name") or "",
            end_time=parse_instant(data.get("endTime"), field_name="endTime"),
            timezone=data.get("timezone") or None,
            status=status,
            cues=tuple(Cue.from_dict(item) for item in data.get("cues") or ()),
            cue_order=tuple(CueOrderItem.from_dict(item) for item in data.get("cueOrder") or ()),
            runner=None if runner is None else Runner.from_dict(runner),
        )
