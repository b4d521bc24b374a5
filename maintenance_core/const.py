# File: const.py
"""Constants for the maintenance core.

This file centralizes frequency labels, time units, status values, bucket
names, display labels and policy defaults used across the engines.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# Safety limit for date calculations
MAX_DATE_CALCULATION_ITERATIONS = 1000

# ------------------------------------------------------------------------------------------------
# Frequencies
# ------------------------------------------------------------------------------------------------
FREQUENCY_DAILY = "DAILY"
FREQUENCY_WEEKLY = "WEEKLY"
FREQUENCY_BIWEEKLY = "BIWEEKLY"
FREQUENCY_MONTHLY = "MONTHLY"
FREQUENCY_QUARTERLY = "QUARTERLY"
FREQUENCY_SEMIANNUAL = "SEMIANNUAL"
FREQUENCY_ANNUAL = "ANNUAL"
FREQUENCY_YEARLY = "YEARLY"  # Alias of ANNUAL

# Time Units
TIME_UNIT_DAYS = "DAYS"
TIME_UNIT_WEEKS = "WEEKS"
TIME_UNIT_MONTHS = "MONTHS"
TIME_UNIT_YEARS = "YEARS"

TIME_UNITS = [
    TIME_UNIT_DAYS,
    TIME_UNIT_WEEKS,
    TIME_UNIT_MONTHS,
    TIME_UNIT_YEARS,
]

# Canonical (value, unit) for each label
FREQUENCY_CANONICAL: dict[str, tuple[int, str]] = {
    FREQUENCY_DAILY: (1, TIME_UNIT_DAYS),
    FREQUENCY_WEEKLY: (1, TIME_UNIT_WEEKS),
    FREQUENCY_BIWEEKLY: (2, TIME_UNIT_WEEKS),
    FREQUENCY_MONTHLY: (1, TIME_UNIT_MONTHS),
    FREQUENCY_QUARTERLY: (3, TIME_UNIT_MONTHS),
    FREQUENCY_SEMIANNUAL: (6, TIME_UNIT_MONTHS),
    FREQUENCY_ANNUAL: (1, TIME_UNIT_YEARS),
    FREQUENCY_YEARLY: (1, TIME_UNIT_YEARS),
}

# Fallback for non-positive values or unknown units/labels
DEFAULT_FREQUENCY_VALUE = 1
DEFAULT_FREQUENCY_UNIT = TIME_UNIT_MONTHS

# Unit inference thresholds for bare day counts (value >= threshold)
UNIT_INFERENCE_THRESHOLDS: list[tuple[int, str]] = [
    (365, TIME_UNIT_YEARS),
    (30, TIME_UNIT_MONTHS),
    (7, TIME_UNIT_WEEKS),
]

# Frequency display labels
FREQUENCY_DISPLAY_LABELS: dict[str, str] = {
    FREQUENCY_DAILY: "Daily",
    FREQUENCY_WEEKLY: "Weekly",
    FREQUENCY_BIWEEKLY: "Biweekly",
    FREQUENCY_MONTHLY: "Monthly",
    FREQUENCY_QUARTERLY: "Quarterly",
    FREQUENCY_SEMIANNUAL: "Semiannual",
    FREQUENCY_ANNUAL: "Annual",
    FREQUENCY_YEARLY: "Annual",
}

TIME_UNIT_DISPLAY: dict[str, tuple[str, str]] = {
    TIME_UNIT_DAYS: ("day", "days"),
    TIME_UNIT_WEEKS: ("week", "weeks"),
    TIME_UNIT_MONTHS: ("month", "months"),
    TIME_UNIT_YEARS: ("year", "years"),
}

# Day-count ranges shown for numeric DAYS frequencies: (min, max, label)
DAY_RANGE_DISPLAY_LABELS: list[tuple[int, int, str]] = [
    (1, 1, "Daily (1 day)"),
    (2, 7, "Weekly (2-7 days)"),
    (8, 15, "Biweekly (8-15 days)"),
    (16, 30, "Monthly (16-30 days)"),
    (31, 90, "Quarterly (31-90 days)"),
    (91, 180, "Semiannual (91-180 days)"),
    (181, 365, "Annual (181-365 days)"),
]

# ------------------------------------------------------------------------------------------------
# Due Status
# ------------------------------------------------------------------------------------------------
BUCKET_OVERDUE = "OVERDUE"
BUCKET_DUE_TODAY = "DUE_TODAY"
BUCKET_DUE_SOON = "DUE_SOON"
BUCKET_BACKLOG = "BACKLOG"

BACKLOG_BUCKETS = [
    BUCKET_OVERDUE,
    BUCKET_DUE_TODAY,
    BUCKET_DUE_SOON,
    BUCKET_BACKLOG,
]

# Aggregate dashboard: "due soon" window (days ahead, inclusive)
DEFAULT_DUE_SOON_DAYS = 7

# Per-item SLA label: warning window (days ahead, inclusive)
DEFAULT_SLA_WARNING_DAYS = 3

SLA_LABEL_OVERDUE = "Overdue {days}d"
SLA_LABEL_DUE_TODAY = "Due today"
SLA_LABEL_DUE_IN = "Due in {days}d"
SLA_LABEL_ON_TIME = "On time"

SLA_TONE_DANGER = "danger"
SLA_TONE_WARNING = "warning"
SLA_TONE_SUCCESS = "success"

# ------------------------------------------------------------------------------------------------
# Checklist Lifecycle
# ------------------------------------------------------------------------------------------------
CHECKLIST_STATE_PENDING = "PENDING"
CHECKLIST_STATE_IN_PROGRESS = "IN_PROGRESS"
CHECKLIST_STATE_COMPLETED = "COMPLETED"

ACTION_EXECUTE_DIRECT = "EXECUTE_DIRECT"
ACTION_REQUIRE_CONFIRMATION = "REQUIRE_CONFIRMATION"

# ------------------------------------------------------------------------------------------------
# Data Keys
# ------------------------------------------------------------------------------------------------
# Scheduled items
DATA_ITEM_ID = "id"
DATA_ITEM_TYPE = "item_type"
DATA_ITEM_TYPE_ALT = "type"  # Key used by the host API payloads
DATA_ITEM_SCHEDULED_DATE = "scheduled_date"
DATA_ITEM_NEXT_MAINTENANCE_DATE = "next_maintenance_date"
DATA_ITEM_COMPLETED_DATE = "completed_date"
DATA_ITEM_FREQUENCY = "frequency"
DATA_ITEM_FREQUENCY_UNIT = "frequency_unit"

# Checklists
DATA_CHECKLIST_ID = "id"
DATA_CHECKLIST_LAST_EXECUTION_DATE = "last_execution_date"
DATA_CHECKLIST_FREQUENCY = "frequency"
DATA_CHECKLIST_IS_COMPLETED = "is_completed"
DATA_CHECKLIST_HAS_IN_PROGRESS_EXECUTION = "has_in_progress_execution"

# Merge key separator: "{id}-{item_type}"
MERGE_KEY_SEPARATOR = "-"
