"""CleanupLease: create-if-absent, refusal while held, expired-lease takeover."""

from datetime import timedelta

import pytest

from tenant_schema.application.services.cleanup_lease import CleanupLease, lease_path
from tenant_schema.domain.exceptions import CleanupLeaseHeldError
from tenant_schema.domain.paths import validate_canonical
from tenant_schema.infrastructure.memory import InMemoryDocumentStore
from tenant_schema.shared.utils.datetime import utc_now


def test_lease_lives_at_a_canonical_path() -> None:
    assert lease_path("T1") == "tenants/T1/monitoring/cleanupLease"
    assert validate_canonical(lease_path("T1"))


async def test_lease_is_created_and_released(store: InMemoryDocumentStore) -> None:
    async with CleanupLease(store, "T1", owner="cron") as lease:
        held = await store.get(lease.path)
        assert held is not None
        assert held.to_dict()["owner"] == "cron"
        assert held.to_dict()["tenantId"] == "T1"
    assert await store.get(lease_path("T1")) is None


async def test_second_holder_is_refused(store: InMemoryDocumentStore) -> None:
    async with CleanupLease(store, "T1", owner="first"):
        with pytest.raises(CleanupLeaseHeldError) as exc_info:
            async with CleanupLease(store, "T1", owner="second"):
                pass
        # The refused attempt leaves the first holder's lease in place.
        held = await store.get(lease_path("T1"))
        assert held.to_dict()["owner"] == "first"
    assert exc_info.value.error_code == "CLEANUP_LEASE_HELD"
    assert exc_info.value.details["owner"] == "first"
    assert await store.get(lease_path("T1")) is None


async def test_expired_lease_is_replaced(store: InMemoryDocumentStore) -> None:
    stale = utc_now() - timedelta(hours=1)
    store.set(lease_path("T1"), {"owner": "crashed", "expiresAt": stale})

    async with CleanupLease(store, "T1", owner="fresh") as lease:
        held = await store.get(lease.path)
        assert held.to_dict()["owner"] == "fresh"


async def test_leases_are_per_tenant(store: InMemoryDocumentStore) -> None:
    async with CleanupLease(store, "T1", owner="a"):
        async with CleanupLease(store, "T2", owner="b"):
            assert await store.get(lease_path("T1")) is not None
            assert await store.get(lease_path("T2")) is not None


async def test_lease_released_when_body_raises(store: InMemoryDocumentStore) -> None:
    with pytest.raises(RuntimeError):
        async with CleanupLease(store, "T1", owner="cron"):
            raise RuntimeError("cleanup crashed")
    assert await store.get(lease_path("T1")) is None
