"""Decide whether a document mutation is worth reacting to.

Listeners that re-sync or notify on document writes call is_meaningful_change
with the before/after snapshots. Housekeeping fields (timestamps bumped on
every write) are stripped first so that a bare "updatedAt" bump does not
fan out into duplicate work.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any

DEFAULT_IGNORE_FIELDS: tuple[str, ...] = (
    "updatedAt",
    "updated_at",
    "lastUpdated",
    "lastModified",
)


def sanitize(value: Any, ignore_fields: Iterable[str] = DEFAULT_IGNORE_FIELDS) -> Any:
    """Return a copy of value without the ignored fields, one level deep.

    Mappings lose the ignored keys. Sequences are copied with their items
    untouched, so mappings inside a list keep every key. Scalars are
    returned as-is. Nested objects are never sanitized.
    """
    ignore = frozenset(ignore_fields)
    if isinstance(value, Mapping):
        return {k: v for k, v in value.items() if k not in ignore}
    if isinstance(value, (list, tuple)):
        return type(value)(value)
    return value


def _serialize(value: Any, sort_keys: bool) -> str:
    return json.dumps(value, sort_keys=sort_keys, default=str)


def is_meaningful_change(
    before: Any,
    after: Any,
    ignore_fields: Iterable[str] = DEFAULT_IGNORE_FIELDS,
    *,
    order_sensitive: bool = True,
) -> bool:
    """Return True if after differs from before outside the ignored fields.

    A snapshot appearing or disappearing (either side None) is always
    meaningful. Otherwise both sides are sanitized and their JSON
    serializations compared.

    By default key order matters: two equal dicts built in different key
    order compare as changed. Pass order_sensitive=False to sort keys at
    every level before comparing.

    Args:
        before: Snapshot before the write, or None.
        after: Snapshot after the write, or None.
        ignore_fields: Top-level field names to disregard.
        order_sensitive: Compare key insertion order as well as content.

    Returns:
        True if the change should be acted upon.
    """
    if before is None or after is None:
        return True
    ignore = tuple(ignore_fields)
    sort_keys = not order_sensitive
    return _serialize(sanitize(before, ignore), sort_keys) != _serialize(
        sanitize(after, ignore), sort_keys
    )
