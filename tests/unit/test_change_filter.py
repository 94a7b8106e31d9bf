"""is_meaningful_change: absence, ignored fields, sequences and key order."""

from datetime import datetime, timezone

import pytest

from tenant_schema.domain.change_filter import (
    DEFAULT_IGNORE_FIELDS,
    is_meaningful_change,
    sanitize,
)

SNAPSHOTS = [
    {},
    {"name": "Acme", "status": "open"},
    {"title": "Forklift operator", "openings": 3, "tags": ["warehouse", "night"]},
    {"updatedAt": "2024-01-01T00:00:00Z", "stage": "qualified"},
]


@pytest.mark.parametrize("snapshot", SNAPSHOTS + [[], [1, 2], "text", 0])
def test_appearance_and_disappearance_are_meaningful(snapshot) -> None:
    assert is_meaningful_change(None, snapshot) is True
    assert is_meaningful_change(snapshot, None) is True


def test_both_absent_is_meaningful() -> None:
    assert is_meaningful_change(None, None) is True


@pytest.mark.parametrize("snapshot", SNAPSHOTS)
@pytest.mark.parametrize(("t1", "t2"), [("a", "b"), (1, 2), ("2024-01-01", "2025-06-30")])
def test_ignored_field_changes_are_not_meaningful(snapshot, t1, t2) -> None:
    before = {**snapshot, "updatedAt": t1}
    after = {**snapshot, "updatedAt": t2}
    assert is_meaningful_change(before, after, ["updatedAt"]) is False
    assert is_meaningful_change(snapshot, {**snapshot, "updatedAt": t2}, ["updatedAt"]) is False


@pytest.mark.parametrize("snapshot", SNAPSHOTS)
@pytest.mark.parametrize("field", ["name", "status", "openings", "brandNew"])
def test_non_ignored_field_changes_are_meaningful(snapshot, field) -> None:
    new_value = "__changed__"
    after = {**snapshot, field: new_value}
    assert is_meaningful_change(snapshot, after, ["updatedAt"]) is True


def test_default_ignore_fields_cover_timestamp_bumps() -> None:
    before = {"name": "Acme", "updatedAt": 1, "lastModified": 1}
    after = {"name": "Acme", "updatedAt": 2, "lastModified": 2}
    assert "updatedAt" in DEFAULT_IGNORE_FIELDS
    assert is_meaningful_change(before, after) is False


def test_identical_snapshots_are_not_meaningful() -> None:
    snapshot = {"name": "Acme", "at": datetime(2024, 1, 1, tzinfo=timezone.utc)}
    assert is_meaningful_change(snapshot, dict(snapshot)) is False


def test_ignored_fields_inside_sequence_items_still_count() -> None:
    before = [{"id": 1, "updatedAt": "a"}]
    after = [{"id": 1, "updatedAt": "b"}]
    assert is_meaningful_change(before, after, ["updatedAt"]) is True
    assert is_meaningful_change(before, [dict(before[0])], ["updatedAt"]) is False


def test_sanitize_keeps_container_kind() -> None:
    assert sanitize({"a": 1, "updatedAt": 2}, ["updatedAt"]) == {"a": 1}
    assert sanitize("scalar", ["updatedAt"]) == "scalar"


def test_sanitize_copies_sequences_without_touching_items() -> None:
    items = [{"a": 1, "updatedAt": 2}, 3]
    copied = sanitize(items, ["updatedAt"])
    assert copied == [{"a": 1, "updatedAt": 2}, 3]
    assert copied is not items
    assert sanitize(({"updatedAt": 2},), ["updatedAt"]) == ({"updatedAt": 2},)


def test_sanitize_is_one_level_deep() -> None:
    before = {"meta": {"updatedAt": 1}, "name": "Acme"}
    after = {"meta": {"updatedAt": 2}, "name": "Acme"}
    assert sanitize(after, ["updatedAt"]) == after
    assert is_meaningful_change(before, after, ["updatedAt"]) is True


def test_sanitize_does_not_mutate_input() -> None:
    snapshot = {"a": 1, "updatedAt": 2}
    sanitize(snapshot, ["updatedAt"])
    assert snapshot == {"a": 1, "updatedAt": 2}


def test_scalars_compare_by_value() -> None:
    assert is_meaningful_change(1, 1) is False
    assert is_meaningful_change("a", "b") is True


def test_key_order_matters_by_default() -> None:
    before = {"a": 1, "b": 2}
    after = {"b": 2, "a": 1}
    assert is_meaningful_change(before, after) is True


def test_order_insensitive_mode_ignores_key_order() -> None:
    before = {"a": 1, "b": {"x": 1, "y": 2}}
    after = {"b": {"y": 2, "x": 1}, "a": 1}
    assert is_meaningful_change(before, after, order_sensitive=False) is False
    assert is_meaningful_change(before, {**after, "a": 2}, order_sensitive=False) is True
