"""Time helpers.

Timestamps are stored as naive UTC datetimes. SQLite drops tzinfo on the
way in, so mixing aware values with values read back from the database
would make comparisons fail. Model fields set `sa_type=DateTime` so the
column type stays naive whatever sqlmodel would pick by default.
"""
import math
from datetime import UTC, datetime

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days elapsed from start to end, rounded down."""
    return math.floor((end - start).total_seconds() / SECONDS_PER_DAY)


def days_between_ceil(start: datetime, end: datetime) -> int:
    """Days elapsed from start to end, rounded up."""
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
