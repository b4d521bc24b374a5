"""Recurrence, due-status, checklist-lifecycle and merge engine for maintenance records.

Every function here is pure: callers pass an explicit `now` and own all
state. Day boundaries are evaluated in the timezone configured with
`maintenance_core.utils.dt_utils.set_default_timezone` (UTC by default).

Public API:
    next_date(completion_date, frequency)
    classify_backlog_bucket(scheduled_date, now)
    classify_sla_label(scheduled_date, now)
    decide_execution_action(checklist_state, now)
    merge(current, incoming)
"""

from .engines import (
    DEFAULT_FREQUENCY,
    ChecklistEngine,
    DueStatusEngine,
    ExecutionDecision,
    Frequency,
    LabeledFrequency,
    MergeEngine,
    MergeResult,
    NumericFrequency,
    RecurrenceEngine,
    SlaStatus,
)
from .engines.checklist_engine import decide_execution_action
from .engines.due_status_engine import classify_backlog_bucket, classify_sla_label
from .engines.merge_engine import build_merge_key, merge
from .engines.recurrence_engine import next_date

__all__ = [
    "DEFAULT_FREQUENCY",
    "ChecklistEngine",
    "DueStatusEngine",
    "ExecutionDecision",
    "Frequency",
    "LabeledFrequency",
    "MergeEngine",
    "MergeResult",
    "NumericFrequency",
    "RecurrenceEngine",
    "SlaStatus",
    "build_merge_key",
    "classify_backlog_bucket",
    "classify_sla_label",
    "decide_execution_action",
    "merge",
    "next_date",
]
