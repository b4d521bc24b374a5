"""Checklist Engine - lifecycle rules for recurring checklists.

A recurring checklist moves PENDING → IN_PROGRESS → COMPLETED, and returns
to PENDING once its recurrence window has elapsed. That reset is lazy: it
is detected when someone asks to execute the checklist (or during a bulk
sweep), never by a background timer.

When execution is requested the engine decides one of:
- EXECUTE_DIRECT: checklist is open (pending or in progress)
- EXECUTE_DIRECT + reset_applied: completed, but the window has elapsed;
  the caller sets is_completed=False first, without asking the user
- REQUIRE_CONFIRMATION: completed within the current window; the caller
  must confirm with the user before a second execution in the same period

ARCHITECTURE: This is a pure logic engine. It returns decisions and new
state dicts; it never mutates the state it is given. Applying a decision
(and recording last_execution_date on completion) belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..helpers.validation_helpers import (
    CHECKLIST_FLAGS_SCHEMA,
    coerce_checklist_state,
)
from ..utils.dt_utils import dt_days_between, dt_format_days_ago
from .recurrence_engine import RecurrenceEngine

if TYPE_CHECKING:
    from ..type_defs import ItemId

# =============================================================================
# DECISION DATA STRUCTURE
# =============================================================================


@dataclass(frozen=True)
class ExecutionDecision:
    """Outcome of an execution request for one checklist.

    Attributes:
        action: ACTION_EXECUTE_DIRECT or ACTION_REQUIRE_CONFIRMATION
        reset_applied: True if the caller must set is_completed=False
                       before executing (silent recurrence reset)
        next_reset_date: When the current cycle reopens, if known. Set for
                         confirmations so the caller can show it.
    """

    action: str
    reset_applied: bool = False
    next_reset_date: date | datetime | None = None


# =============================================================================
# CHECKLIST ENGINE
# =============================================================================


class ChecklistEngine:
    """Pure logic engine for checklist lifecycle decisions.

    All methods are static - no instance state.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        const.CHECKLIST_STATE_PENDING: [
            const.CHECKLIST_STATE_IN_PROGRESS,
            const.CHECKLIST_STATE_COMPLETED,  # Executed in one go
        ],
        const.CHECKLIST_STATE_IN_PROGRESS: [
            const.CHECKLIST_STATE_COMPLETED,
        ],
        const.CHECKLIST_STATE_COMPLETED: [
            const.CHECKLIST_STATE_PENDING,  # Recurrence reset
            const.CHECKLIST_STATE_IN_PROGRESS,  # Confirmed re-execution
        ],
    }

    # =========================================================================
    # STATE
    # =========================================================================

    @staticmethod
    def _coerce_state(state: Any) -> dict[str, Any]:
        """Validate the lifecycle fields of one checklist record.

        An invalid record is treated as open and never executed.
        """
        coerced = coerce_checklist_state(state, require_id=False)
        if coerced is None:
            return dict(CHECKLIST_FLAGS_SCHEMA({}))
        return coerced

    @staticmethod
    def can_transition(current_state: str, target_state: str) -> bool:
        """Validate if a lifecycle transition is allowed."""
        return target_state in ChecklistEngine.VALID_TRANSITIONS.get(current_state, [])

    @staticmethod
    def derive_state(state: Mapping[str, Any]) -> str:
        """Map the stored flags to a lifecycle state.

        is_completed wins over has_in_progress_execution: a completed
        checklist with a stale in-progress flag is still COMPLETED.
        """
        state = ChecklistEngine._coerce_state(state)
        if state.get(const.DATA_CHECKLIST_IS_COMPLETED):
            return const.CHECKLIST_STATE_COMPLETED
        if state.get(const.DATA_CHECKLIST_HAS_IN_PROGRESS_EXECUTION):
            return const.CHECKLIST_STATE_IN_PROGRESS
        return const.CHECKLIST_STATE_PENDING

    # =========================================================================
    # RESET RULES
    # =========================================================================

    @staticmethod
    def get_next_reset_date(state: Mapping[str, Any]) -> date | datetime | None:
        """Return the date the current cycle reopens.

        Returns None if the checklist has never been executed or the last
        execution date cannot be parsed.
        """
        state = ChecklistEngine._coerce_state(state)
        last_execution = state.get(const.DATA_CHECKLIST_LAST_EXECUTION_DATE)
        if not last_execution:
            return None
        return RecurrenceEngine.next_date(
            last_execution, state.get(const.DATA_CHECKLIST_FREQUENCY)
        )

    @staticmethod
    def needs_reset(
        state: Mapping[str, Any], now: str | date | datetime
    ) -> bool:
        """Check whether the recurrence window since the last execution elapsed.

        True iff last_execution_date is set and `now` is on or after the next
        reset date (compared as local calendar days).
        """
        state = ChecklistEngine._coerce_state(state)
        next_reset = ChecklistEngine.get_next_reset_date(state)
        if next_reset is None:
            return False

        days_until_reset = dt_days_between(now, next_reset)
        if days_until_reset is None:
            return False
        return days_until_reset <= 0

    @staticmethod
    def decide_execution_action(
        state: Mapping[str, Any], now: str | date | datetime
    ) -> ExecutionDecision:
        """Decide how an execution request for this checklist proceeds.

        Args:
            state: ChecklistStateData-shaped mapping
            now: Reference time supplied by the caller

        Returns:
            ExecutionDecision (see module docstring for the three outcomes)
        """
        state = ChecklistEngine._coerce_state(state)
        if not state.get(const.DATA_CHECKLIST_IS_COMPLETED):
            return ExecutionDecision(action=const.ACTION_EXECUTE_DIRECT)

        if ChecklistEngine.needs_reset(state, now):
            const.LOGGER.debug(
                "ChecklistEngine: Checklist %s reset due, executing directly",
                state.get(const.DATA_CHECKLIST_ID),
            )
            return ExecutionDecision(
                action=const.ACTION_EXECUTE_DIRECT, reset_applied=True
            )

        return ExecutionDecision(
            action=const.ACTION_REQUIRE_CONFIRMATION,
            next_reset_date=ChecklistEngine.get_next_reset_date(state),
        )

    @staticmethod
    def apply_reset(state: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of the state moved back to PENDING.

        Only is_completed changes; last_execution_date is kept so the next
        cycle is still measured from the real last execution.
        """
        new_state = dict(state)
        new_state[const.DATA_CHECKLIST_IS_COMPLETED] = False
        return new_state

    @staticmethod
    def plan_resets(
        states: Iterable[Mapping[str, Any]], now: str | date | datetime
    ) -> list[ItemId]:
        """Return the ids of completed checklists whose reset is due.

        Used for the bulk sweep when a checklist listing is opened.
        Malformed records (no usable id) are skipped.
        """
        due: list[ItemId] = []
        for raw_state in states:
            state = coerce_checklist_state(raw_state)
            if state is None:
                continue
            if state[const.DATA_CHECKLIST_IS_COMPLETED] and ChecklistEngine.needs_reset(
                state, now
            ):
                due.append(state[const.DATA_CHECKLIST_ID])
        return due

    # =========================================================================
    # DISPLAY
    # =========================================================================

    @staticmethod
    def format_last_execution(
        state: Mapping[str, Any], now: str | date | datetime
    ) -> str:
        """Describe the last execution relative to `now` ("3 days ago")."""
        formatted = dt_format_days_ago(
            state.get(const.DATA_CHECKLIST_LAST_EXECUTION_DATE), now
        )
        return formatted or "Never executed"


# =============================================================================
# MODULE-LEVEL API
# =============================================================================


def decide_execution_action(
    state: Mapping[str, Any], now: str | date | datetime
) -> ExecutionDecision:
    """Decide how a checklist execution proceeds (see ChecklistEngine)."""
    return ChecklistEngine.decide_execution_action(state, now)
