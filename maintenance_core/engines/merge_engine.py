"""Merge Engine - deduplicating fold of incoming batches.

Maintenance lists are fed by several overlapping sources: an eager
aggregate snapshot, paginated list fetches and infinite-scroll appends.
Responses resolve in any order and often repeat records. `merge` folds a
batch into the collection the caller already holds:

- existing items keep their order; new items are appended in batch order
- an item whose identity (id, item_type) is already present (in the
  collection or earlier in the batch) is dropped as a duplicate; ids are
  compared as text, so 7 and "7" are the same record
- items without a usable id or item type are excluded and counted

The engine has no notion of recency. Discarding stale pages is the
caller's job, done before merging with the stream-marker helpers below:
each logical stream carries a monotonically increasing page marker and a
response older than the latest applied marker is dropped.

ARCHITECTURE: Pure functions. Inputs are never mutated; a new list is
returned, except that an empty batch returns the current list object
itself so callers can detect "nothing changed" by identity.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from .. import const
from ..helpers.validation_helpers import extract_identity

if TYPE_CHECKING:
    from ..type_defs import MergeKey, StreamMarkers

# =============================================================================
# RESULT STRUCTURE
# =============================================================================


class MergeResult(NamedTuple):
    """Result of a merge.

    Attributes:
        items: The merged collection
        dropped_count: Incoming items excluded as malformed
        duplicate_count: Incoming items skipped because their key was present
    """

    items: list[Any]
    dropped_count: int = 0
    duplicate_count: int = 0


# =============================================================================
# MERGE ENGINE
# =============================================================================


class MergeEngine:
    """Pure logic engine for identity-based collection merges."""

    @staticmethod
    def build_merge_key(item: Any) -> MergeKey | None:
        """Return the "{id}-{item_type}" key of an item, or None if malformed."""
        identity = extract_identity(item)
        if identity is None:
            return None
        item_id, item_type = identity
        return f"{item_id}{const.MERGE_KEY_SEPARATOR}{item_type}"

    @staticmethod
    def _identity_key(item: Any) -> tuple[str, str] | None:
        """Return the (id, item_type) pair used for deduplication.

        Compared as a pair, not as the joined key string, so "1-A"/"B" and
        "1"/"A-B" stay distinct.
        """
        identity = extract_identity(item)
        if identity is None:
            return None
        item_id, item_type = identity
        return str(item_id), item_type

    @staticmethod
    def merge(current: list[Any], incoming: Iterable[Any]) -> MergeResult:
        """Fold an incoming batch into the current collection.

        Args:
            current: Collection held by the caller (assumed duplicate-free)
            incoming: New batch from any source, in source order

        Returns:
            MergeResult with the merged list and drop/duplicate counts.
        """
        incoming_items = list(incoming)
        if not incoming_items:
            return MergeResult(current)

        existing_keys = {
            key
            for key in (MergeEngine._identity_key(item) for item in current)
            if key is not None
        }
        merged = list(current)
        dropped = 0
        duplicates = 0

        for item in incoming_items:
            key = MergeEngine._identity_key(item)
            if key is None:
                dropped += 1
                continue
            if key in existing_keys:
                duplicates += 1
                continue
            existing_keys.add(key)
            merged.append(item)

        if dropped:
            const.LOGGER.debug(
                "MergeEngine: Dropped %d malformed item(s) of %d incoming",
                dropped,
                len(incoming_items),
            )

        return MergeResult(merged, dropped, duplicates)

    # =========================================================================
    # STREAM STALENESS (caller-side contract)
    # =========================================================================

    @staticmethod
    def is_stale_page(
        applied_markers: Mapping[str, int], stream_key: str, marker: int
    ) -> bool:
        """Check whether a page is older than the latest applied one.

        Args:
            applied_markers: Latest applied marker per stream
            stream_key: Logical stream (e.g. "pending:company-42")
            marker: Page/sequence marker carried by the response

        Returns:
            True if the response must be discarded before merging.
        """
        latest = applied_markers.get(stream_key)
        return latest is not None and marker < latest

    @staticmethod
    def record_applied_page(
        applied_markers: StreamMarkers, stream_key: str, marker: int
    ) -> StreamMarkers:
        """Return a new marker map with this page recorded as applied.

        The stored marker never moves backwards.
        """
        new_markers = dict(applied_markers)
        latest = new_markers.get(stream_key)
        if latest is None or marker > latest:
            new_markers[stream_key] = marker
        return new_markers


# =============================================================================
# MODULE-LEVEL API
# =============================================================================


def build_merge_key(item: Any) -> MergeKey | None:
    """Return the merge key of an item (see MergeEngine)."""
    return MergeEngine.build_merge_key(item)


def merge(current: list[Any], incoming: Iterable[Any]) -> MergeResult:
    """Fold a batch into a collection (see MergeEngine.merge)."""
    return MergeEngine.merge(current, incoming)
