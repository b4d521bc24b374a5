# File: helpers/validation_helpers.py
"""Input validation for host-supplied records.

Host payloads are loosely typed: ids arrive as ints or strings, the type
field may be called `item_type` or `type`, and booleans sometimes come in
as strings. These voluptuous schemas are the single place where such
records are checked; engines call the `extract_*` / `coerce_*` helpers and
treat a None result as a documented degradation, never as an error.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import voluptuous as vol

from .. import const


def _identity_value(value: Any) -> str | int:
    """Validate one identity component (id or item type).

    Accepts non-empty strings and integers; rejects booleans, None and
    blank strings.
    """
    if isinstance(value, bool):
        raise vol.Invalid("identity value cannot be a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise vol.Invalid(f"identity value must be a non-empty string or int: {value!r}")


# =============================================================================
# Schemas
# =============================================================================

MERGE_IDENTITY_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_ITEM_ID): _identity_value,
        vol.Required(const.DATA_ITEM_TYPE): vol.All(_identity_value, vol.Coerce(str)),
    },
    extra=vol.ALLOW_EXTRA,
)

CHECKLIST_FLAGS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_CHECKLIST_LAST_EXECUTION_DATE, default=None): object,
        vol.Optional(const.DATA_CHECKLIST_FREQUENCY, default=None): object,
        vol.Optional(const.DATA_CHECKLIST_IS_COMPLETED, default=False): vol.Boolean(),
        vol.Optional(
            const.DATA_CHECKLIST_HAS_IN_PROGRESS_EXECUTION, default=False
        ): vol.Boolean(),
    },
    extra=vol.ALLOW_EXTRA,
)

CHECKLIST_STATE_SCHEMA = CHECKLIST_FLAGS_SCHEMA.extend(
    {vol.Required(const.DATA_CHECKLIST_ID): _identity_value}
)


# =============================================================================
# Helpers
# =============================================================================


def extract_identity(item: Any) -> tuple[str | int, str] | None:
    """Return the `(id, item_type)` identity of a record, or None if malformed.

    The type is read from `item_type`, falling back to `type`.
    """
    if not isinstance(item, Mapping):
        const.LOGGER.debug("Malformed item (not a mapping): %r", item)
        return None

    item_type = item.get(const.DATA_ITEM_TYPE)
    if item_type is None:
        item_type = item.get(const.DATA_ITEM_TYPE_ALT)

    try:
        validated = MERGE_IDENTITY_SCHEMA(
            {
                const.DATA_ITEM_ID: item.get(const.DATA_ITEM_ID),
                const.DATA_ITEM_TYPE: item_type,
            }
        )
    except vol.Invalid as err:
        const.LOGGER.debug("Malformed item identity %r: %s", item, err)
        return None

    return validated[const.DATA_ITEM_ID], validated[const.DATA_ITEM_TYPE]


def coerce_checklist_state(
    state: Any, *, require_id: bool = True
) -> dict[str, Any] | None:
    """Validate a checklist record and fill defaults.

    Flags sent as strings ("true", "no", ...) become booleans. With
    `require_id=False` only the lifecycle fields are checked, for callers
    that decide on a single record the host already identified.

    Returns a new dict (the input is never modified), or None if the record
    is invalid.
    """
    if not isinstance(state, Mapping):
        const.LOGGER.debug("Malformed checklist state (not a mapping): %r", state)
        return None

    try:
        schema = CHECKLIST_STATE_SCHEMA if require_id else CHECKLIST_FLAGS_SCHEMA
        return dict(schema(dict(state)))
    except vol.Invalid as err:
        const.LOGGER.debug("Malformed checklist state %r: %s", state, err)
        return None
