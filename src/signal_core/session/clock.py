"""Session clock: UTC hour to trading session via a lookup table.

Buckets are half-open ``[start, end)`` hour ranges checked in priority order,
so overlapping sessions resolve to the first match. Each bucket carries one
multiplier per caller context:

* ``volatility``: scales simulated per-bar volatility
* ``premium``: scales aggregated signal scores (the aggregator caps it)
* ``volume``: scales simulated bar volume

All three keep the ordering overlap > single major session > Tokyo > quiet.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from signal_core.errors import InvalidInputError
from signal_core.models import SessionInfo


@dataclass(frozen=True)
class SessionBucket:
    name: str
    start: int
    end: int
    volatility: float
    premium: float
    volume: float
    optimal: bool

    def contains(self, hour: int) -> bool:
        return self.start <= hour < self.end


SESSION_TABLE: tuple[SessionBucket, ...] = (
    SessionBucket("LONDON_NY_OVERLAP", 13, 17, 2.0, 1.5, 1.5, True),
    SessionBucket("LONDON", 8, 17, 1.6, 1.2, 1.3, True),
    SessionBucket("NEW_YORK", 13, 22, 1.5, 1.2, 1.3, True),
    SessionBucket("TOKYO", 0, 9, 1.1, 1.1, 0.9, False),
)

QUIET = SessionBucket("QUIET", 0, 24, 0.6, 1.0, 0.8, False)


def bucket_for(utc_hour: int) -> SessionBucket:
    """Return the table row for *utc_hour* (0..23)."""
    if not isinstance(utc_hour, int) or isinstance(utc_hour, bool) or not 0 <= utc_hour <= 23:
        raise InvalidInputError(f"utc_hour must be an int in 0..23, got {utc_hour!r}")
    for bucket in SESSION_TABLE:
        if bucket.contains(utc_hour):
            return bucket
    return QUIET


def classify(utc_hour: int) -> SessionInfo:
    """Session for a UTC hour, with the simulation volatility multiplier."""
    bucket = bucket_for(utc_hour)
    return SessionInfo(name=bucket.name, multiplier=bucket.volatility, is_optimal=bucket.optimal)


def signal_multiplier(utc_hour: int) -> float:
    """Score premium applied by the aggregator for this hour."""
    return bucket_for(utc_hour).premium


def volume_multiplier(utc_hour: int) -> float:
    return bucket_for(utc_hour).volume


def utc_hour_of(ts: datetime | int) -> int:
    """UTC hour of a datetime (naive means UTC) or a ms-epoch timestamp."""
    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            return ts.hour
        return ts.astimezone(timezone.utc).hour
    return datetime.fromtimestamp(ts / 1000, tz=timezone.utc).hour


def session_at(ts: datetime | int) -> SessionInfo:
    return classify(utc_hour_of(ts))
