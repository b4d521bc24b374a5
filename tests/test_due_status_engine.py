"""Tests for DueStatusEngine - backlog buckets and SLA labels.

The two policies use different windows (7 days for the dashboard bucket,
3 days for the per-item label); several tests pin that divergence.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from maintenance_core import const
from maintenance_core.engines.due_status_engine import (
    DueStatusEngine,
    SlaStatus,
    classify_backlog_bucket,
    classify_sla_label,
)
from maintenance_core.utils import dt_utils

# =============================================================================
# BACKLOG-BUCKET POLICY
# =============================================================================


class TestClassifyBacklogBucket:
    """Test the aggregate backlog-bucket policy."""

    @pytest.mark.parametrize(
        ("offset_days", "expected"),
        [
            (-30, const.BUCKET_OVERDUE),
            (-1, const.BUCKET_OVERDUE),
            (0, const.BUCKET_DUE_TODAY),
            (1, const.BUCKET_DUE_SOON),
            (3, const.BUCKET_DUE_SOON),
            (7, const.BUCKET_DUE_SOON),
            (8, const.BUCKET_BACKLOG),
            (10, const.BUCKET_BACKLOG),
        ],
    )
    def test_offsets(self, today: date, offset_days: int, expected: str) -> None:
        """Bucket follows the whole-day offset from today."""
        scheduled = today + timedelta(days=offset_days)
        assert classify_backlog_bucket(scheduled, today) == expected

    @pytest.mark.parametrize("scheduled", [None, "", "not a date"])
    def test_missing_date_is_backlog(self, today: date, scheduled: object) -> None:
        """No usable date routes the item to BACKLOG."""
        assert classify_backlog_bucket(scheduled, today) == const.BUCKET_BACKLOG  # type: ignore[arg-type]

    def test_time_of_day_is_ignored(self) -> None:
        """Late today vs. early today is still DUE_TODAY."""
        scheduled = datetime(2026, 10, 18, 23, 0, tzinfo=UTC)
        now = datetime(2026, 10, 18, 1, 0, tzinfo=UTC)
        assert classify_backlog_bucket(scheduled, now) == const.BUCKET_DUE_TODAY

    def test_one_minute_before_midnight_is_overdue(self) -> None:
        """Yesterday 23:59 is overdue at 00:01 today."""
        scheduled = datetime(2026, 10, 17, 23, 59, tzinfo=UTC)
        now = datetime(2026, 10, 18, 0, 1, tzinfo=UTC)
        assert classify_backlog_bucket(scheduled, now) == const.BUCKET_OVERDUE

    def test_day_boundary_uses_configured_timezone(self, today: date) -> None:
        """02:00 UTC on the 19th is still the 18th in New York."""
        dt_utils.set_default_timezone(ZoneInfo("America/New_York"))
        scheduled = datetime(2026, 10, 19, 2, 0, tzinfo=UTC)
        assert classify_backlog_bucket(scheduled, today) == const.BUCKET_DUE_TODAY

    def test_iso_strings(self) -> None:
        """ISO strings from the host API are accepted."""
        assert (
            classify_backlog_bucket("2026-10-20T08:00:00Z", "2026-10-18")
            == const.BUCKET_DUE_SOON
        )

    def test_due_soon_window_override(self, today: date) -> None:
        """The DUE_SOON window can be narrowed per call."""
        scheduled = today + timedelta(days=5)
        assert (
            DueStatusEngine.classify_backlog_bucket(scheduled, today, due_soon_days=3)
            == const.BUCKET_BACKLOG
        )


class TestCountBacklogBuckets:
    """Test aggregate bucket counting."""

    def test_counts(self, today: date) -> None:
        """Each item lands in exactly one bucket."""
        offsets = [-2, 0, 4, 20]
        items = [
            {"id": i, "item_type": "PREVENTIVE", "scheduled_date": today + timedelta(days=d)}
            for i, d in enumerate(offsets, start=1)
        ]
        items.append({"id": 5, "item_type": "CORRECTIVE"})
        items.append({"id": 6, "item_type": "PREVENTIVE", "scheduled_date": "bogus"})
        assert DueStatusEngine.count_backlog_buckets(items, today) == {
            const.BUCKET_OVERDUE: 1,
            const.BUCKET_DUE_TODAY: 1,
            const.BUCKET_DUE_SOON: 1,
            const.BUCKET_BACKLOG: 3,
        }

    def test_empty(self, today: date) -> None:
        """No items → all zero."""
        counts = DueStatusEngine.count_backlog_buckets([], today)
        assert sum(counts.values()) == 0
        assert set(counts) == set(const.BACKLOG_BUCKETS)


# =============================================================================
# SLA-LABEL POLICY
# =============================================================================


class TestClassifySlaLabel:
    """Test the per-item SLA label policy."""

    @pytest.mark.parametrize(
        ("offset_days", "expected"),
        [
            (-5, "Overdue 5d"),
            (-1, "Overdue 1d"),
            (0, "Due today"),
            (1, "Due in 1d"),
            (3, "Due in 3d"),
            (4, "On time"),
            (30, "On time"),
        ],
    )
    def test_offsets(self, today: date, offset_days: int, expected: str) -> None:
        """Label follows the whole-day offset from today."""
        scheduled = today + timedelta(days=offset_days)
        assert classify_sla_label(scheduled, today) == expected

    def test_no_date_no_label(self, today: date) -> None:
        """Unscheduled items get no label."""
        assert classify_sla_label(None, today) is None

    def test_partial_day_does_not_round_up(self) -> None:
        """Tomorrow morning seen from this evening is 1 day, not today."""
        scheduled = datetime(2026, 10, 19, 6, 0, tzinfo=UTC)
        now = datetime(2026, 10, 18, 22, 0, tzinfo=UTC)
        assert classify_sla_label(scheduled, now) == "Due in 1d"

    def test_policies_diverge_between_3_and_7_days(self, today: date) -> None:
        """5 days out: dashboard says DUE_SOON, item label says On time."""
        scheduled = today + timedelta(days=5)
        assert classify_backlog_bucket(scheduled, today) == const.BUCKET_DUE_SOON
        assert classify_sla_label(scheduled, today) == const.SLA_LABEL_ON_TIME

    def test_warning_window_override(self, today: date) -> None:
        """The warning window can be widened per call."""
        scheduled = today + timedelta(days=5)
        assert (
            DueStatusEngine.classify_sla_label(scheduled, today, warning_days=7)
            == "Due in 5d"
        )


class TestSlaStatus:
    """Test SLA label tones."""

    def test_tones(self, today: date) -> None:
        """Overdue is danger, due soon is warning, on time is success."""
        assert DueStatusEngine.sla_status(today - timedelta(days=2), today) == SlaStatus(
            "Overdue 2d", const.SLA_TONE_DANGER
        )
        assert DueStatusEngine.sla_status(today, today) == SlaStatus(
            "Due today", const.SLA_TONE_WARNING
        )
        assert DueStatusEngine.sla_status(today + timedelta(days=9), today) == SlaStatus(
            "On time", const.SLA_TONE_SUCCESS
        )

    def test_none(self, today: date) -> None:
        """No date → no status."""
        assert DueStatusEngine.sla_status(None, today) is None


# =============================================================================
# DUE DATE RESOLUTION
# =============================================================================


class TestResolveDueDate:
    """Test effective due date selection."""

    def test_next_maintenance_date_wins(self) -> None:
        """next_maintenance_date is preferred over scheduled_date."""
        item = {
            "id": 1,
            "item_type": "PREVENTIVE",
            "scheduled_date": "2026-01-01",
            "next_maintenance_date": "2026-02-01",
        }
        assert DueStatusEngine.resolve_due_date(item) == "2026-02-01"

    def test_scheduled_date(self) -> None:
        """scheduled_date is used when there is no next date."""
        item = {"id": 1, "item_type": "PREVENTIVE", "scheduled_date": "2026-01-01"}
        assert DueStatusEngine.resolve_due_date(item) == "2026-01-01"

    def test_projects_from_completion_label(self) -> None:
        """Completed items project forward by their labeled frequency."""
        item = {
            "id": 1,
            "item_type": "PREVENTIVE",
            "completed_date": "2024-01-31",
            "frequency": "MONTHLY",
        }
        assert DueStatusEngine.resolve_due_date(item) == date(2024, 2, 29)

    def test_projects_from_completion_value_and_unit(self) -> None:
        """Numeric frequency with a separate unit."""
        item = {
            "id": 1,
            "item_type": "PREVENTIVE",
            "completed_date": date(2026, 10, 1),
            "frequency": 2,
            "frequency_unit": "WEEKS",
        }
        assert DueStatusEngine.resolve_due_date(item) == date(2026, 10, 15)

    def test_nothing_to_resolve(self) -> None:
        """No date fields → None."""
        assert DueStatusEngine.resolve_due_date({"id": 1, "item_type": "X"}) is None

    def test_projected_date_is_classified(self, today: date) -> None:
        """A projection from last month's completion is due today."""
        item = {
            "id": 1,
            "item_type": "PREVENTIVE",
            "completed_date": date(2026, 9, 18),
            "frequency": "MONTHLY",
        }
        counts = DueStatusEngine.count_backlog_buckets([item], today)
        assert counts[const.BUCKET_DUE_TODAY] == 1

    @pytest.mark.parametrize("unit", [2, ["WEEKS"]])
    def test_unusable_unit_falls_back_to_monthly(self, unit: object) -> None:
        """A non-text frequency_unit projects with the monthly default."""
        item = {
            "id": 1,
            "item_type": "PREVENTIVE",
            "completed_date": "2026-10-01",
            "frequency": 3,
            "frequency_unit": unit,
        }
        assert DueStatusEngine.resolve_due_date(item) == date(2026, 11, 1)

    def test_unusable_unit_does_not_break_counts(self, today: date) -> None:
        """One loosely typed record still gets counted."""
        items = [
            {
                "id": 1,
                "item_type": "PREVENTIVE",
                "completed_date": "2026-10-01",
                "frequency": 3,
                "frequency_unit": 2,
            },
            {"id": 2, "item_type": "PREVENTIVE", "scheduled_date": today},
        ]
        counts = DueStatusEngine.count_backlog_buckets(items, today)
        assert counts[const.BUCKET_BACKLOG] == 1
        assert counts[const.BUCKET_DUE_TODAY] == 1
