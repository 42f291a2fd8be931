"""
Timestamp Service

Strict parsing of partner timestamps and freshness window checks.

Wire format: yyyy-MM-ddTHH:mm:ss.fffffffZ
- Exactly 7 fractional-second digits (100ns ticks)
- Literal trailing Z, interpreted as UTC
- No other separators, offsets or lengths are accepted
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

TIMESTAMP_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{7})Z",
    re.ASCII
)

DEFAULT_TOLERANCE = timedelta(minutes=5)

TICKS_PER_SECOND = 10_000_000


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def to_ticks(delta: timedelta) -> int:
    """Exact length of a timedelta in 100ns ticks."""
    return (delta // timedelta(microseconds=1)) * 10


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a wire timestamp into an aware UTC datetime.

    Args:
        value: Timestamp string as supplied by the partner

    Returns:
        Parsed datetime, or None if the string deviates from the format
        or names an impossible date/time (e.g. month 13)

    Note:
        Python datetimes carry microseconds, so the 7th fractional digit
        (sub-microsecond ticks) is truncated after it has been validated;
        is_fresh reads it back from the string.
    """
    if not isinstance(value, str):
        return None

    match = TIMESTAMP_PATTERN.fullmatch(value)
    if not match:
        return None

    year, month, day, hour, minute, second, ticks = match.groups()

    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second),
            int(ticks) // 10,
            tzinfo=timezone.utc
        )
    except ValueError:
        return None


def format_timestamp(moment: datetime) -> str:
    """
    Render a datetime in the wire timestamp format.

    Naive datetimes are assumed to already be UTC.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}T"
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}."
        f"{moment.microsecond * 10:07d}Z"
    )


def format_signing_timestamp(moment: datetime) -> str:
    """Render a datetime as yyyyMMddHHmmss (UTC) for the signature payload."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{moment.year:04d}{moment.month:02d}{moment.day:02d}"
        f"{moment.hour:02d}{moment.minute:02d}{moment.second:02d}"
    )


def is_fresh(
    value: Optional[str],
    now: Optional[datetime] = None,
    tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """
    Check that a wire timestamp lies within tolerance of server time.

    Args:
        value: Timestamp string as supplied by the partner
        now: Server time (defaults to the current UTC time)
        tolerance: Maximum allowed distance, inclusive, in either direction

    Returns:
        True if parseable and |now - timestamp| <= tolerance
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        logger.debug(f"Unparseable timestamp: {value!r}")
        return False

    now = now or utc_now()

    # Compare in 100ns ticks so the truncated 7th digit still counts
    sub_microsecond_ticks = int(value[-2])
    skew_ticks = abs(to_ticks(now - parsed) - sub_microsecond_ticks)

    if skew_ticks > to_ticks(tolerance):
        logger.debug(f"Timestamp {value} outside window: skew={skew_ticks / TICKS_PER_SECOND:.7f}s")
        return False

    return True


class TimestampValidator:
    """
    Freshness check bound to a clock and a tolerance.

    The clock is injectable so callers (and tests) can pin server time.
    """

    def __init__(
        self,
        tolerance: timedelta = DEFAULT_TOLERANCE,
        clock: Callable[[], datetime] = utc_now
    ):
        self.tolerance = tolerance
        self.clock = clock

    def is_fresh(self, value: Optional[str]) -> bool:
        return is_fresh(value, now=self.clock(), tolerance=self.tolerance)
