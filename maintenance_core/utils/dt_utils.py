# File: utils/dt_utils.py
"""Date and time utilities for the maintenance core.

Pure Python date/time functions with no framework dependencies.
Uses standard library: datetime, zoneinfo, plus dateutil.

Functions:
    - set_default_timezone / get_default_timezone: Configure local timezone
    - as_local: Timezone conversion
    - start_of_local_day: Midnight of a datetime in local timezone
    - dt_parse_date: Parse date strings
    - dt_parse: Normalize str/date/datetime inputs
    - dt_to_local_date: Normalize any input to a local calendar date
    - dt_days_between: Whole calendar days between two inputs
    - dt_add_interval: Add DAYS/WEEKS/MONTHS/YEARS with month-end clamping
    - dt_format_days_ago: Human-readable "N days ago" text
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Time unit constants
TIME_UNIT_DAYS = "DAYS"
TIME_UNIT_WEEKS = "WEEKS"
TIME_UNIT_MONTHS = "MONTHS"
TIME_UNIT_YEARS = "YEARS"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this once during host setup to configure the site's timezone.
    Day boundaries (midnight normalization) are evaluated in this zone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object. Naive values are assumed to already be local.
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=tz_info)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get the start of day (00:00:00) for a datetime in local timezone.

    Args:
        dt_obj: Datetime object (can be in any timezone)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime at 00:00:00 in local timezone (timezone-aware)
    """
    local_dt = as_local(dt_obj, tz)
    return local_dt.replace(hour=0, minute=0, second=0, microsecond=0)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2025-04-07" (ISO format)
    - "07/04/2025" (day-first format used by the maintenance UI)
    - "2025/04/07"

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
) -> datetime | None:
    """Normalize various datetime input formats to an aware datetime.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)

    Returns:
        Timezone-aware datetime, or None if the input could not be parsed.

    Example:
        >>> dt_parse("2025-04-15")
        datetime.datetime(2025, 4, 15, 0, 0, tzinfo=ZoneInfo('UTC'))
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, str):
        # Host payloads sometimes carry a trailing "Z" for UTC
        text = dt_input.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        try:
            result = datetime.fromisoformat(text)
        except ValueError:
            parsed_date = dt_parse_date(text)
            if parsed_date is None:
                _LOGGER.debug("dt_parse: Could not parse %r", dt_input)
                return None
            result = datetime.combine(parsed_date, datetime.min.time())

    elif isinstance(dt_input, datetime):
        result = dt_input

    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())

    else:
        _LOGGER.debug("dt_parse: Unsupported input type %s", type(dt_input))
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)

    return result


def dt_to_local_date(dt_input: str | date | datetime | None) -> date | None:
    """Normalize an input to its calendar date in the local timezone.

    This is the midnight normalization used by every day-granularity
    comparison: partial days never affect the result.

    - `date` values are taken as-is.
    - Naive datetimes are assumed local and simply truncated.
    - Aware datetimes are converted to local time first.
    """
    if isinstance(dt_input, datetime):
        return as_local(dt_input).date()
    if isinstance(dt_input, date):
        return dt_input

    parsed = dt_parse(dt_input)
    if parsed is None:
        return None
    return as_local(parsed).date()


def dt_days_between(
    start: str | date | datetime | None,
    end: str | date | datetime | None,
) -> int | None:
    """Return whole calendar days from `start` to `end` (negative if earlier).

    Both ends are normalized to local midnight before subtraction.
    Returns None if either side is missing or unparsable.
    """
    start_date = dt_to_local_date(start)
    end_date = dt_to_local_date(end)
    if start_date is None or end_date is None:
        return None
    return (end_date - start_date).days


# ==============================================================================
# Interval Calculations
# ==============================================================================


def dt_add_interval(
    base_date: date | datetime,
    interval_unit: str,
    delta: int,
) -> date | datetime | None:
    """Add a time interval to a date/datetime.

    MONTHS and YEARS use relativedelta, which clamps to the last valid day
    of the target month (Jan 31 + 1 month = Feb 28/29, Feb 29 + 1 year =
    Feb 28 in a non-leap year). The input type is preserved.

    Args:
        base_date: datetime.date or datetime.datetime.
        interval_unit: One of the TIME_UNIT_* constants.
        delta: Number of time units to add.

    Returns:
        The calculated date/datetime, or None on error.
    """
    try:
        if interval_unit == TIME_UNIT_DAYS:
            return base_date + timedelta(days=delta)
        if interval_unit == TIME_UNIT_WEEKS:
            return base_date + timedelta(weeks=delta)
        if interval_unit == TIME_UNIT_MONTHS:
            return base_date + relativedelta(months=delta)
        if interval_unit == TIME_UNIT_YEARS:
            return base_date + relativedelta(years=delta)
    except (ValueError, OverflowError) as exc:
        _LOGGER.warning(
            "dt_add_interval: Error adding %s %s to %s: %s",
            delta,
            interval_unit,
            base_date,
            exc,
        )
        return None

    _LOGGER.warning("dt_add_interval: Unknown interval_unit: %s", interval_unit)
    return None


# ==============================================================================
# Formatting
# ==============================================================================


def dt_format_days_ago(
    dt_input: str | date | datetime | None,
    now: str | date | datetime,
) -> str | None:
    """Format how long ago a date was, relative to `now`.

    Returns "Today", "Yesterday", "N days ago", "In N days" for future
    dates, or None if the input is missing/unparsable.
    """
    days = dt_days_between(dt_input, now)
    if days is None:
        return None
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 0:
        return f"In {abs(days)} days"
    return f"{days} days ago"
