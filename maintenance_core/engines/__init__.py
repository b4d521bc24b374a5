"""Engine modules for the maintenance core.

Contains specialized computation engines:
- recurrence_engine: Frequency normalization and next-date projection
- due_status_engine: Backlog buckets and SLA labels
- checklist_engine: Checklist lifecycle and reset decisions
- merge_engine: Deduplicating merge of incoming batches
"""

# Use relative imports within package to avoid mypy module resolution issues
from .checklist_engine import ChecklistEngine, ExecutionDecision
from .due_status_engine import DueStatusEngine, SlaStatus
from .merge_engine import MergeEngine, MergeResult
from .recurrence_engine import (
    DEFAULT_FREQUENCY,
    Frequency,
    LabeledFrequency,
    NumericFrequency,
    RecurrenceEngine,
)

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
]
