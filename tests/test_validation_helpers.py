"""Tests for helpers/validation_helpers.py voluptuous schemas."""

from __future__ import annotations

import pytest

from maintenance_core import const
from maintenance_core.helpers.validation_helpers import (
    coerce_checklist_state,
    extract_identity,
)


class TestExtractIdentity:
    """Test merge identity extraction."""

    def test_item_type_key(self) -> None:
        """Standard key."""
        assert extract_identity({"id": 1, "item_type": "PREVENTIVE"}) == (1, "PREVENTIVE")

    def test_type_key_fallback(self) -> None:
        """`type` is used when `item_type` is missing."""
        assert extract_identity({"id": "x", "type": "CORRECTIVE"}) == ("x", "CORRECTIVE")

    def test_strings_are_stripped(self) -> None:
        """Surrounding whitespace does not create a new identity."""
        assert extract_identity({"id": " 12 ", "item_type": " A "}) == ("12", "A")

    @pytest.mark.parametrize(
        "item",
        [
            {},
            {"id": 1},
            {"item_type": "A"},
            {"id": None, "item_type": "A"},
            {"id": "", "item_type": "A"},
            {"id": 1.5, "item_type": "A"},
            {"id": True, "item_type": "A"},
            None,
            ("id", "A"),
        ],
    )
    def test_malformed(self, item: object) -> None:
        """Malformed records give None."""
        assert extract_identity(item) is None


class TestCoerceChecklistState:
    """Test checklist record coercion."""

    def test_defaults_filled(self) -> None:
        """Optional fields get their defaults."""
        state = coerce_checklist_state({"id": 3})
        assert state == {
            const.DATA_CHECKLIST_ID: 3,
            const.DATA_CHECKLIST_LAST_EXECUTION_DATE: None,
            const.DATA_CHECKLIST_FREQUENCY: None,
            const.DATA_CHECKLIST_IS_COMPLETED: False,
            const.DATA_CHECKLIST_HAS_IN_PROGRESS_EXECUTION: False,
        }

    def test_string_booleans(self) -> None:
        """String flags are converted."""
        state = coerce_checklist_state(
            {"id": 3, "is_completed": "true", "has_in_progress_execution": "no"}
        )
        assert state is not None
        assert state[const.DATA_CHECKLIST_IS_COMPLETED] is True
        assert state[const.DATA_CHECKLIST_HAS_IN_PROGRESS_EXECUTION] is False

    def test_extra_fields_kept_and_input_untouched(self) -> None:
        """Unknown fields pass through; the input dict is not modified."""
        raw = {"id": 3, "title": "Weekly lubrication"}
        state = coerce_checklist_state(raw)
        assert state is not None
        assert state["title"] == "Weekly lubrication"
        assert raw == {"id": 3, "title": "Weekly lubrication"}

    @pytest.mark.parametrize(
        "raw", [{}, {"id": None}, {"id": 1, "is_completed": "maybe"}, "x"]
    )
    def test_invalid(self, raw: object) -> None:
        """Invalid records give None."""
        assert coerce_checklist_state(raw) is None

    def test_without_id_requirement(self) -> None:
        """Lifecycle fields alone are enough when no id is required."""
        state = coerce_checklist_state({"is_completed": "false"}, require_id=False)
        assert state is not None
        assert state[const.DATA_CHECKLIST_IS_COMPLETED] is False
        assert state[const.DATA_CHECKLIST_HAS_IN_PROGRESS_EXECUTION] is False

    def test_without_id_requirement_still_checks_flags(self) -> None:
        """An unreadable flag is rejected either way."""
        assert coerce_checklist_state({"is_completed": "maybe"}, require_id=False) is None
