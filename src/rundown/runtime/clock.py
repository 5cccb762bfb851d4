"""Timezone and calendar arithmetic used by the timestamp engine.

Instants are timezone-aware datetimes and are kept in UTC internally.
Anything that depends on a *calendar day* (applying a cue's time-of-day to a
show day, counting day offsets) is done on local dates in the rundown's
timezone, so results stay correct across DST transitions.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..infra.exceptions import ValidationError
from ..infra.settings import settings

ONE_MS = timedelta(milliseconds=1)


def ensure_aware(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive input is read as UTC)."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def resolve_timezone(tz: str | tzinfo | None) -> tzinfo:
    """Resolve an IANA name (or tzinfo) to a tzinfo, defaulting to settings."""
    if isinstance(tz, tzinfo):
        return tz
    name = tz or settings.default_timezone
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {name!r}") from e


def add_ms(instant: datetime, ms: int) -> datetime:
    """Absolute (elapsed-time) addition of milliseconds."""
    return instant + ms * ONE_MS


def ms_between(start: datetime, end: datetime) -> int:
    """Signed number of milliseconds from ``start`` to ``end``."""
    return int((end - start) / ONE_MS)


class RundownClock:
    """Calendar math pinned to one rundown timezone.

    The clock is stateless apart from its timezone; every method is a pure
    function of its arguments.

    Parameters
    ----------
    tz:
        IANA timezone name or tzinfo. ``None`` or ``""`` falls back to the
        configured default timezone.
    """

    def __init__(self, tz: str | tzinfo | None = None) -> None:
        self.tz = resolve_timezone(tz)

    def __repr__(self) -> str:
        return f"RundownClock(tz={self.tz!s})"

    def now_utc(self) -> datetime:
        """Return current UTC time as an aware datetime."""
        return datetime.now(timezone.utc)

    def to_local(self, instant: datetime) -> datetime:
        """Convert an instant to wall-clock time in the rundown timezone."""
        return ensure_aware(instant).astimezone(self.tz)

    def day_of(self, instant: datetime) -> date:
        """Calendar day of ``instant`` in the rundown timezone."""
        return self.to_local(instant).date()

    def apply_date(self, instant: datetime, day: date) -> datetime:
        """Keep the local time-of-day of ``instant`` but move it onto ``day``.

        The wall-clock time is re-resolved on the target day, so a 09:00 start
        stays at 09:00 local even when the UTC offset differs between the two
        days.
        """
        wall = self.to_local(instant).time()
        return datetime.combine(day, wall, tzinfo=self.tz).astimezone(timezone.utc)

    def apply_date_plus(self, instant: datetime, day: date, days_plus: int) -> datetime:
        """Like :meth:`apply_date` on ``day + days_plus`` calendar days."""
        return self.apply_date(instant, day + timedelta(days=days_plus))

    def calendar_days_between(self, later: datetime, earlier: datetime) -> int:
        """Number of local calendar-day boundaries between two instants."""
        return (self.day_of(later) - self.day_of(earlier)).days
