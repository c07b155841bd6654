"""Trading session clock."""

from signal_core.session.clock import (
    SESSION_TABLE,
    bucket_for,
    classify,
    session_at,
    signal_multiplier,
    utc_hour_of,
    volume_multiplier,
)

__all__ = [
    "SESSION_TABLE",
    "bucket_for",
    "classify",
    "session_at",
    "signal_multiplier",
    "utc_hour_of",
    "volume_multiplier",
]
