"""Type definitions for maintenance core data structures.

TypedDict shapes for the records handed in by the host application.
These are STATIC ANALYSIS ONLY: the engines still read fields with
`.get()` and defaults, because host payloads are loosely typed and any
field may be missing or malformed at runtime.

IMPORTANT: This file must NOT import from the engines to avoid circular
dependencies. Only import from typing (type machinery).
"""

from datetime import date, datetime
from typing import Any, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ItemId = str | int
MergeKey = str  # "{id}-{item_type}"
DateInput = str | date | datetime | None

# Frequency as it arrives from the host: a label ("MONTHLY"), a numeric
# string ("30"), a bare int, or an already-built Frequency object.
RawFrequency = str | int | Any


# =============================================================================
# Scheduled Items
# =============================================================================


class ScheduledItemData(TypedDict):
    """A maintenance record as seen by the due-status and merge engines.

    Read-only to this package; created and owned by the host system.
    """

    id: ItemId
    item_type: str  # PREVENTIVE, CORRECTIVE, ...
    scheduled_date: NotRequired[DateInput]
    next_maintenance_date: NotRequired[DateInput]
    completed_date: NotRequired[DateInput]
    frequency: NotRequired[RawFrequency]
    frequency_unit: NotRequired[str | None]
    status: NotRequired[str]


# =============================================================================
# Checklists
# =============================================================================


class ChecklistStateData(TypedDict):
    """Lifecycle state of a recurring checklist.

    `is_completed=False` is the only mutation this package ever suggests
    (via ChecklistEngine.apply_reset), and only when the reset is due.
    """

    id: ItemId
    last_execution_date: NotRequired[DateInput]
    frequency: RawFrequency
    is_completed: bool
    has_in_progress_execution: NotRequired[bool]


# =============================================================================
# Streams
# =============================================================================


# Latest applied page/sequence marker per logical stream
StreamMarkers = dict[str, int]
