"""Due Status Engine - urgency classification of scheduled maintenance.

Two independent policies are kept side by side:

- Backlog buckets (aggregate dashboard counts): OVERDUE / DUE_TODAY /
  DUE_SOON (within 7 days) / BACKLOG.
- SLA labels (per-item display): "Overdue Nd" / "Due today" /
  "Due in Nd" (within 3 days) / "On time".

The 7-day and 3-day windows are separate constants (manager dashboard vs
individual item) and are not unified.

Both policies compare calendar days: the scheduled date and `now` are each
normalized to local midnight before subtraction, so the time of day never
shifts an item between buckets. A missing or unparsable date is a
documented degradation (BACKLOG / no label), not an error.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
import math
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_days_between
from .recurrence_engine import RecurrenceEngine

if TYPE_CHECKING:
    from ..type_defs import ScheduledItemData


@dataclass(frozen=True)
class SlaStatus:
    """SLA label plus a display tone (danger, warning, success)."""

    label: str
    tone: str


class DueStatusEngine:
    """Pure logic engine for due-date classification."""

    # =========================================================================
    # BACKLOG-BUCKET POLICY
    # =========================================================================

    @staticmethod
    def classify_backlog_bucket(
        scheduled_date: str | date | datetime | None,
        now: str | date | datetime,
        due_soon_days: int = const.DEFAULT_DUE_SOON_DAYS,
    ) -> str:
        """Classify a scheduled date into a backlog bucket.

        Args:
            scheduled_date: When the item is due (None means unscheduled)
            now: Reference "today" supplied by the caller
            due_soon_days: Upper bound (inclusive) of the DUE_SOON window

        Returns:
            One of BUCKET_OVERDUE, BUCKET_DUE_TODAY, BUCKET_DUE_SOON,
            BUCKET_BACKLOG.
        """
        days_diff = dt_days_between(now, scheduled_date)
        if days_diff is None:
            return const.BUCKET_BACKLOG
        if days_diff < 0:
            return const.BUCKET_OVERDUE
        if days_diff == 0:
            return const.BUCKET_DUE_TODAY
        if days_diff <= due_soon_days:
            return const.BUCKET_DUE_SOON
        return const.BUCKET_BACKLOG

    @staticmethod
    def count_backlog_buckets(
        items: Iterable[ScheduledItemData],
        now: str | date | datetime,
        due_soon_days: int = const.DEFAULT_DUE_SOON_DAYS,
    ) -> dict[str, int]:
        """Count pending items per backlog bucket.

        Each item is classified by its effective due date
        (see resolve_due_date). Items with no usable date count as BACKLOG.
        """
        counts: dict[str, int] = {
            const.BUCKET_OVERDUE: 0,
            const.BUCKET_DUE_TODAY: 0,
            const.BUCKET_DUE_SOON: 0,
            const.BUCKET_BACKLOG: 0,
        }
        for item in items:
            bucket = DueStatusEngine.classify_backlog_bucket(
                DueStatusEngine.resolve_due_date(item),
                now,
                due_soon_days=due_soon_days,
            )
            counts[bucket] += 1
        return counts

    # =========================================================================
    # SLA-LABEL POLICY
    # =========================================================================

    @staticmethod
    def sla_status(
        scheduled_date: str | date | datetime | None,
        now: str | date | datetime,
        warning_days: int = const.DEFAULT_SLA_WARNING_DAYS,
    ) -> SlaStatus | None:
        """Return the SLA label and tone for a scheduled date.

        Args:
            scheduled_date: When the item is due (None means no label)
            now: Reference "today" supplied by the caller
            warning_days: Upper bound (inclusive) of the "Due in Nd" window

        Returns:
            SlaStatus, or None when the item has no usable date.
        """
        days_diff = dt_days_between(now, scheduled_date)
        if days_diff is None:
            return None

        if days_diff < 0:
            overdue_days = math.ceil(abs(days_diff))
            return SlaStatus(
                const.SLA_LABEL_OVERDUE.format(days=overdue_days),
                const.SLA_TONE_DANGER,
            )
        if days_diff < 1:
            return SlaStatus(const.SLA_LABEL_DUE_TODAY, const.SLA_TONE_WARNING)
        if days_diff <= warning_days:
            return SlaStatus(
                const.SLA_LABEL_DUE_IN.format(days=math.ceil(days_diff)),
                const.SLA_TONE_WARNING,
            )
        return SlaStatus(const.SLA_LABEL_ON_TIME, const.SLA_TONE_SUCCESS)

    @staticmethod
    def classify_sla_label(
        scheduled_date: str | date | datetime | None,
        now: str | date | datetime,
        warning_days: int = const.DEFAULT_SLA_WARNING_DAYS,
    ) -> str | None:
        """Return only the SLA label text (see sla_status)."""
        status = DueStatusEngine.sla_status(
            scheduled_date, now, warning_days=warning_days
        )
        return status.label if status else None

    # =========================================================================
    # DUE DATE RESOLUTION
    # =========================================================================

    @staticmethod
    def resolve_due_date(item: ScheduledItemData) -> date | datetime | str | None:
        """Return the effective due date of a scheduled item.

        Order of preference:
        1. next_maintenance_date
        2. scheduled_date
        3. completed_date projected forward by the item's frequency

        Returns None when none of these is available.
        """
        for key in (
            const.DATA_ITEM_NEXT_MAINTENANCE_DATE,
            const.DATA_ITEM_SCHEDULED_DATE,
        ):
            value = item.get(key)
            if value:
                return value

        completed = item.get(const.DATA_ITEM_COMPLETED_DATE)
        if not completed:
            return None

        frequency = RecurrenceEngine.coerce_frequency(
            item.get(const.DATA_ITEM_FREQUENCY),
            item.get(const.DATA_ITEM_FREQUENCY_UNIT),
        )
        return RecurrenceEngine.next_date(completed, frequency)


# =============================================================================
# MODULE-LEVEL API
# =============================================================================


def classify_backlog_bucket(
    scheduled_date: str | date | datetime | None, now: str | date | datetime
) -> str:
    """Classify into a backlog bucket (see DueStatusEngine)."""
    return DueStatusEngine.classify_backlog_bucket(scheduled_date, now)


def classify_sla_label(
    scheduled_date: str | date | datetime | None, now: str | date | datetime
) -> str | None:
    """Return the SLA label (see DueStatusEngine)."""
    return DueStatusEngine.classify_sla_label(scheduled_date, now)
