"""Recurrence Engine - calendar-correct next-occurrence calculation.

Projects the next due date of a recurring maintenance task from its
completion date and frequency.

Frequencies arrive from the host in several shapes (a label such as
"MONTHLY", a numeric string, an int with a separate unit, a bare day
count). They are coerced once into a tagged Frequency value, and every
Frequency is normalized to a canonical NumericFrequency before any date
arithmetic:

- DAYS / WEEKS: fixed-length timedelta
- MONTHS / YEARS: `dateutil.relativedelta`, which clamps to the last valid
  day of the target month (Jan 31 + 1 month = Feb 28/29, Feb 29 + 1 year =
  Feb 28 in a non-leap year)

ARCHITECTURE: This is a pure logic engine. All methods are static, take
explicit arguments and never raise for bad input: invalid frequencies fall
back to (1, MONTHS) and unusable dates yield None.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .. import const
from ..utils.dt_utils import dt_add_interval, dt_parse, dt_parse_date, dt_to_local_date

# =============================================================================
# FREQUENCY VALUES
# =============================================================================


@dataclass(frozen=True)
class NumericFrequency:
    """A frequency expressed as `value` units (e.g. 3 WEEKS)."""

    value: int
    unit: str


@dataclass(frozen=True)
class LabeledFrequency:
    """A frequency expressed by name (e.g. MONTHLY)."""

    label: str


Frequency = LabeledFrequency | NumericFrequency

DEFAULT_FREQUENCY = NumericFrequency(
    const.DEFAULT_FREQUENCY_VALUE, const.DEFAULT_FREQUENCY_UNIT
)


# =============================================================================
# RECURRENCE ENGINE
# =============================================================================


class RecurrenceEngine:
    """Pure logic engine for frequency handling and date projection."""

    # =========================================================================
    # FREQUENCY COERCION & NORMALIZATION
    # =========================================================================

    @staticmethod
    def coerce_frequency(raw: Any, unit: str | None = None) -> Frequency:
        """Build a Frequency from a loosely typed host value.

        Args:
            raw: Frequency object, label string, numeric string or int
            unit: Optional unit for numeric values (DAYS, WEEKS, ...)

        Returns:
            LabeledFrequency for known labels, NumericFrequency for numbers,
            DEFAULT_FREQUENCY for anything unusable.

        Examples:
            "monthly"          → LabeledFrequency("MONTHLY")
            ("3", "weeks")     → NumericFrequency(3, "WEEKS")
            (14, None)         → NumericFrequency(2, "WEEKS")  # day count
            (45, None)         → NumericFrequency(45, "DAYS")
        """
        if isinstance(raw, LabeledFrequency | NumericFrequency):
            return raw

        if isinstance(raw, str):
            text = raw.strip().upper()
            if text in const.FREQUENCY_CANONICAL:
                return LabeledFrequency(text)
            try:
                raw = int(text)
            except ValueError:
                const.LOGGER.debug(
                    "RecurrenceEngine: Unrecognized frequency %r, using default", raw
                )
                return DEFAULT_FREQUENCY

        if isinstance(raw, bool) or not isinstance(raw, int | float):
            const.LOGGER.debug(
                "RecurrenceEngine: Unusable frequency %r, using default", raw
            )
            return DEFAULT_FREQUENCY

        if isinstance(raw, float):
            if not raw.is_integer():
                const.LOGGER.debug(
                    "RecurrenceEngine: Fractional frequency %r, using default", raw
                )
                return DEFAULT_FREQUENCY
            raw = int(raw)

        if isinstance(unit, str) and unit.strip():
            return NumericFrequency(raw, unit.strip().upper())
        if unit is not None and not isinstance(unit, str):
            const.LOGGER.debug(
                "RecurrenceEngine: Unusable frequency unit %r, using default", unit
            )
            return DEFAULT_FREQUENCY

        return RecurrenceEngine._infer_from_day_count(raw)

    @staticmethod
    def _infer_from_day_count(days: int) -> NumericFrequency:
        """Interpret a bare count as days, promoting exact multiples.

        365 → 1 YEARS, 60 → 2 MONTHS, 14 → 2 WEEKS, 45 → 45 DAYS.
        """
        if days <= 0:
            return NumericFrequency(days, const.TIME_UNIT_DAYS)

        for threshold, unit in const.UNIT_INFERENCE_THRESHOLDS:
            if days >= threshold and days % threshold == 0:
                return NumericFrequency(days // threshold, unit)

        return NumericFrequency(days, const.TIME_UNIT_DAYS)

    @staticmethod
    def normalize_frequency(frequency: Any) -> NumericFrequency:
        """Normalize any frequency to its canonical numeric form.

        Labels map to their (value, unit) pair; a numeric frequency with a
        non-positive or non-integer value, or an unknown unit, is replaced
        by the (1, MONTHS) default.
        """
        frequency = RecurrenceEngine.coerce_frequency(frequency)

        if isinstance(frequency, LabeledFrequency):
            label = frequency.label
            canonical = (
                const.FREQUENCY_CANONICAL.get(label.strip().upper())
                if isinstance(label, str)
                else None
            )
            if canonical is None:
                const.LOGGER.debug(
                    "RecurrenceEngine: Unknown label %s, using default",
                    frequency.label,
                )
                return DEFAULT_FREQUENCY
            return NumericFrequency(*canonical)

        value = frequency.value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            const.LOGGER.debug(
                "RecurrenceEngine: Invalid frequency value %r, using default", value
            )
            return DEFAULT_FREQUENCY

        if frequency.unit not in const.TIME_UNITS:
            const.LOGGER.debug(
                "RecurrenceEngine: Invalid frequency unit %r, using default",
                frequency.unit,
            )
            return DEFAULT_FREQUENCY

        return NumericFrequency(value, frequency.unit)

    # =========================================================================
    # DATE PROJECTION
    # =========================================================================

    @staticmethod
    def next_date(
        completion_date: str | date | datetime | None,
        frequency: Any,
    ) -> date | datetime | None:
        """Calculate the next occurrence after a completion.

        Args:
            completion_date: date, datetime or ISO string
            frequency: Frequency object or raw host value

        Returns:
            Next due date, same type as the input (date-only strings give a
            date, datetime strings give an aware datetime). None if the
            completion date is missing or unparsable, or the result would
            fall outside the supported calendar range.
        """
        base = RecurrenceEngine._parse_base_date(completion_date)
        if base is None:
            return None

        normalized = RecurrenceEngine.normalize_frequency(frequency)
        return dt_add_interval(base, normalized.unit, normalized.value)

    @staticmethod
    def _parse_base_date(value: str | date | datetime | None) -> date | datetime | None:
        """Parse a completion date, keeping date-only inputs as dates."""
        if isinstance(value, date):
            return value
        if not value or not isinstance(value, str):
            return None

        parsed_date = dt_parse_date(value.strip())
        if parsed_date is not None:
            return parsed_date

        parsed = dt_parse(value)
        if parsed is None:
            const.LOGGER.debug(
                "RecurrenceEngine: Could not parse completion date %r", value
            )
        return parsed

    @staticmethod
    def get_occurrences(
        start: str | date | datetime | None,
        frequency: Any,
        until: str | date | datetime | None,
        limit: int = 100,
    ) -> list[date | datetime]:
        """Project successive occurrences after `start`, up to `until`.

        Each occurrence is computed from the previous one, so month-end
        clamping carries forward (Jan 31 → Feb 28 → Mar 28).

        Args:
            start: Completion date the series starts from (excluded)
            frequency: Frequency object or raw host value
            until: Last calendar day to include
            limit: Maximum occurrences to return (safety limit)

        Returns:
            List of occurrences, empty if either bound is unusable.
        """
        until_day = dt_to_local_date(until)
        if until_day is None:
            return []

        occurrences: list[date | datetime] = []
        current = RecurrenceEngine.next_date(start, frequency)
        max_count = min(limit, const.MAX_DATE_CALCULATION_ITERATIONS)

        while current is not None and len(occurrences) < max_count:
            current_day = dt_to_local_date(current)
            if current_day is None or current_day > until_day:
                break
            occurrences.append(current)
            current = RecurrenceEngine.next_date(current, frequency)

        if len(occurrences) >= const.MAX_DATE_CALCULATION_ITERATIONS:
            const.LOGGER.warning(
                "RecurrenceEngine: Max iterations reached for %s", frequency
            )

        return occurrences

    # =========================================================================
    # DISPLAY
    # =========================================================================

    @staticmethod
    def format_frequency(frequency: Any) -> str:
        """Return an English display label for a frequency.

        Labels use their name ("Monthly"). Numeric day counts are grouped
        into the ranges shown in maintenance listings ("Weekly (2-7 days)");
        other units read "Every 3 weeks" / "Every month".
        """
        coerced = RecurrenceEngine.coerce_frequency(frequency)
        if isinstance(coerced, LabeledFrequency) and isinstance(coerced.label, str):
            label = const.FREQUENCY_DISPLAY_LABELS.get(coerced.label.strip().upper())
            if label:
                return label

        normalized = RecurrenceEngine.normalize_frequency(coerced)
        value, unit = normalized.value, normalized.unit

        if unit == const.TIME_UNIT_DAYS:
            for low, high, label in const.DAY_RANGE_DISPLAY_LABELS:
                if low <= value <= high:
                    return label
            return f"Every {value} days"

        singular, plural = const.TIME_UNIT_DISPLAY[unit]
        if value == 1:
            return f"Every {singular}"
        return f"Every {value} {plural}"


# =============================================================================
# MODULE-LEVEL API
# =============================================================================


def next_date(
    completion_date: str | date | datetime | None, frequency: Any
) -> date | datetime | None:
    """Calculate the next due date (see RecurrenceEngine.next_date)."""
    return RecurrenceEngine.next_date(completion_date, frequency)
