"""
zero_reveal_id/dates.py
ASCII date parsing and the proof freshness window.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from .errors import InvalidDateError

logger = logging.getLogger(__name__)

DATE_LENGTH = 8  # YYYYMMDD
SECONDS_PER_DAY = 86400
CURRENT_DATE_OFFSET = 1  # public input slots [1, 9)

_UNBOUNDED_DATES = {b'0' * DATE_LENGTH, b'\x00' * DATE_LENGTH}


def parse_ascii_date(raw: bytes) -> int:
    """Convert an 8-byte ASCII date (YYYYMMDD) to a UTC timestamp.

    A date made only of ASCII zeros or NUL bytes means "no bound"
    and converts to 0.

    Args:
        raw: Exactly 8 bytes

    Returns:
        Seconds since the epoch at 00:00 UTC of that day

    Raises:
        InvalidDateError: If the bytes are not a calendar date
    """
    raw = bytes(raw)
    if len(raw) != DATE_LENGTH:
        raise InvalidDateError(f"date must be {DATE_LENGTH} bytes, got {len(raw)}")
    if raw in _UNBOUNDED_DATES:
        return 0
    if not raw.isdigit():
        raise InvalidDateError(f"date is not ASCII digits: {raw!r}")
    try:
        parsed = datetime.strptime(raw.decode('ascii'), '%Y%m%d')
    except ValueError as exc:
        raise InvalidDateError(f"not a calendar date: {raw!r}") from exc
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def format_ascii_date(value: datetime) -> bytes:
    """Render a date as 8 ASCII bytes (YYYYMMDD)."""
    return value.strftime('%Y%m%d').encode('ascii')


def is_date_valid(timestamp: int, validity_period_in_days: int,
                  now: Optional[int] = None) -> bool:
    """Check a timestamp is not in the future and not older than the window."""
    if now is None:
        now = int(time.time())
    if timestamp > now:
        return False
    return now - timestamp <= validity_period_in_days * SECONDS_PER_DAY


def current_date_bytes(public_inputs: Sequence[int]) -> bytes:
    """Rebuild the 8-byte current date from public input slots 1..8.

    Raises:
        InvalidDateError: If a slot does not hold a single byte
    """
    slots = list(public_inputs[CURRENT_DATE_OFFSET:CURRENT_DATE_OFFSET + DATE_LENGTH])
    if len(slots) != DATE_LENGTH:
        raise InvalidDateError("public inputs too short for current date")
    if any(slot < 0 or slot > 0xFF for slot in slots):
        raise InvalidDateError("current date slot exceeds one byte")
    return bytes(slots)


def is_current_date_valid(public_inputs: Sequence[int], validity_period_in_days: int,
                          now: Optional[int] = None) -> bool:
    """Check the date embedded at proof generation lies in the validity window.

    Malformed dates yield False instead of raising. The "no bound"
    date is rejected here since a proof must carry a real date.
    """
    try:
        raw = current_date_bytes(public_inputs)
        timestamp = parse_ascii_date(raw)
    except InvalidDateError as exc:
        logger.debug("current date rejected: %s", exc)
        return False
    if timestamp == 0:
        return False
    return is_date_valid(timestamp, validity_period_in_days, now)
