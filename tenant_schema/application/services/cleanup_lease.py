"""Advisory per-tenant lease that keeps cleanup runs from overlapping.

The lease is a document at tenants/{tenant_id}/monitoring/cleanupLease
created with create-if-absent semantics. It is advisory: cleanup itself
never checks it, so only callers that opt in are serialized.

Example:
    async with CleanupLease(store, "acme", owner="ops-cron"):
        await run_legacy_cleanup(store, CleanupOptions(tenant_id="acme"))
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from tenant_schema.application.interfaces.document_store import IDocumentStore
from tenant_schema.domain.collections import DOC_CLEANUP_LEASE
from tenant_schema.domain.exceptions import CleanupLeaseHeldError, DocumentExistsError
from tenant_schema.domain.paths import p
from tenant_schema.shared.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_LEASE_TTL_SECONDS = 900


def lease_path(tenant_id: str) -> str:
    return f"{p.monitoring(tenant_id)}/{DOC_CLEANUP_LEASE}"


class CleanupLease:
    """Async context manager holding the tenant's cleanup lease.

    An unexpired lease held by someone else raises CleanupLeaseHeldError.
    An expired lease (its holder crashed) is replaced.
    """

    def __init__(
        self,
        store: IDocumentStore,
        tenant_id: str,
        owner: str,
        ttl_seconds: int = DEFAULT_LEASE_TTL_SECONDS,
    ) -> None:
        self._store = store
        self.tenant_id = tenant_id
        self.owner = owner
        self.ttl = timedelta(seconds=ttl_seconds)
        self.path = lease_path(tenant_id)
        self._held = False

    def _lease_data(self) -> dict[str, Any]:
        now = utc_now()
        return {
            "tenantId": self.tenant_id,
            "owner": self.owner,
            "acquiredAt": now,
            "expiresAt": now + self.ttl,
        }

    async def acquire(self) -> None:
        """Create the lease document or raise CleanupLeaseHeldError."""
        try:
            await self._store.create(self.path, self._lease_data())
        except DocumentExistsError:
            existing = await self._store.get(self.path)
            data = existing.to_dict() if existing else {}
            expires_at = ensure_utc(data.get("expiresAt"))
            if existing is not None and expires_at is not None and expires_at > utc_now():
                raise CleanupLeaseHeldError(self.tenant_id, data.get("owner")) from None
            logger.warning(
                "Replacing expired cleanup lease for tenant %s (owner %s)",
                self.tenant_id,
                data.get("owner"),
            )
            await self._store.delete(self.path)
            try:
                await self._store.create(self.path, self._lease_data())
            except DocumentExistsError:
                raise CleanupLeaseHeldError(self.tenant_id) from None
        self._held = True
        logger.info("Acquired cleanup lease for tenant %s as %s", self.tenant_id, self.owner)

    async def release(self) -> None:
        if not self._held:
            return
        await self._store.delete(self.path)
        self._held = False
        logger.info("Released cleanup lease for tenant %s", self.tenant_id)

    async def __aenter__(self) -> CleanupLease:
        await self.acquire()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        await self.release()
