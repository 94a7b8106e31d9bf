"""Legacy collection cleanup (phase 1 of the tenant schema migration).

Removes collections superseded by the canonical layout for one tenant:

1. duplicate collections (recruiter_*, crm_locations)
2. the stray tenant-level locations collection
3. the pre-tenant-scoping root jobOrders collection (this tenant's documents)

Each container is probed, then deleted in bounded batches. Failures are
recorded per container and the run moves on; nothing is retried. A run is
best-effort, not transactional: only a single batch commit is atomic.

Runs against the same tenant must not overlap (there is no locking; wrap
runs in CleanupLease if callers cannot serialize them otherwise). Runs
against different tenants are independent.
"""

from __future__ import annotations

import logging

from tenant_schema.application.dtos.cleanup import (
    CleanupOptions,
    CleanupResult,
    PhaseResult,
    VerificationResult,
)
from tenant_schema.application.dtos.documents import ContainerRef
from tenant_schema.application.interfaces.document_store import IDocumentStore
from tenant_schema.domain.legacy import (
    LEGACY_CONTAINERS,
    CleanupPhase,
    LegacyContainer,
    containers_for_phase,
)
from tenant_schema.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

logger = logging.getLogger(__name__)

TENANT_ID_FIELD = "tenantId"


def container_ref(container: LegacyContainer, tenant_id: str) -> ContainerRef:
    """Store reference for a legacy container of the given tenant."""
    if container.top_level:
        return ContainerRef(
            container.path_for(tenant_id),
            filter_field=TENANT_ID_FIELD,
            filter_value=tenant_id,
        )
    return ContainerRef(container.path_for(tenant_id))


class LegacyCollectionCleanup:
    """One cleanup run against one tenant.

    Construct a new instance per run. The store is injected so that runs
    can target Firestore, the emulator, or an in-memory store.
    """

    def __init__(self, store: IDocumentStore, options: CleanupOptions) -> None:
        self._store = store
        self.options = options

    @property
    def tenant_id(self) -> str:
        return self.options.tenant_id

    @traced("legacy_cleanup.run")
    async def run_cleanup(self) -> CleanupResult:
        """Run every phase in order and return the accumulated result.

        A failing container never stops the run: its error is appended to
        result.errors and success stays True. success is False only when
        the orchestration itself raises.
        """
        result = CleanupResult()
        try:
            logger.info(
                "Starting legacy cleanup for tenant %s (dry_run=%s, batch_size=%s)",
                self.tenant_id,
                self.options.dry_run,
                self.options.batch_size,
            )
            for step, phase in enumerate(CleanupPhase, start=1):
                logger.info("Step %d: %s", step, phase.value)
                result.add_phase(await self._run_phase(phase))

            result.processed = result.summary.documents_deleted
            result.deleted = result.summary.documents_deleted
            add_span_attributes(
                collections_removed=result.summary.collections_removed,
                documents_deleted=result.summary.documents_deleted,
                error_count=len(result.errors),
            )
            logger.info(
                "Cleanup completed for tenant %s: removed %d collections, deleted %d documents",
                self.tenant_id,
                result.summary.collections_removed,
                result.summary.documents_deleted,
            )
        except Exception as e:
            logger.exception("Cleanup failed for tenant %s", self.tenant_id)
            result.success = False
            result.errors.append(f"Cleanup failed: {e}")
        return result

    async def _run_phase(self, phase: CleanupPhase) -> PhaseResult:
        result = PhaseResult()
        for container in containers_for_phase(phase):
            ref = container_ref(container, self.tenant_id)
            try:
                found = await self._store.probe(ref, limit=1)
                if not found:
                    continue
                logger.info("Found legacy container %s (%s)", container.name, ref.path)
                if self.options.dry_run:
                    result.warnings.append(f"Would delete legacy container: {container.name}")
                    continue
                deleted = await self.delete_collection(ref)
                result.collections_removed += 1
                result.documents_deleted += deleted
            except Exception as e:
                message = f"Error processing legacy container {container.name}: {e}"
                logger.error(message)
                result.errors.append(message)
        return result

    @traced("legacy_cleanup.delete_collection")
    async def delete_collection(self, container: ContainerRef) -> int:
        """Delete every document of the container, batch_size at a time.

        Each page is fetched from the start of the container and deleted in
        one atomic commit, so a commit never exceeds batch_size writes. The
        loop ends when a fetch comes back empty.

        Returns:
            Number of documents deleted.
        """
        batch_size = self.options.batch_size
        deleted = 0
        while True:
            page = await self._store.fetch_page(container, limit=batch_size)
            if not page:
                break
            await self._store.atomic_delete_many([doc.path for doc in page])
            deleted += len(page)
            add_span_event("batch_deleted", {"container": container.path, "count": len(page)})
            logger.info(
                "Deleted batch of %d documents from %s", len(page), container.path
            )
        return deleted

    @traced("legacy_cleanup.verify")
    async def verify_cleanup(self) -> VerificationResult:
        """Report legacy containers that still hold documents. Read-only.

        issues holds one "still exists" line per remaining container. A
        container whose probe fails is left out of remaining_collections and
        gets a "Could not verify collection ..." line in issues instead, so
        issues may be longer than remaining_collections.
        """
        remaining: list[str] = []
        issues: list[str] = []
        for container in LEGACY_CONTAINERS:
            ref = container_ref(container, self.tenant_id)
            try:
                found = await self._store.probe(ref, limit=1)
            except Exception as e:
                logger.warning("Could not verify %s: %s", ref.path, e)
                issues.append(f"Could not verify collection {container.name}: {e}")
                continue
            if found:
                remaining.append(container.name)
                issues.append(f"Collection {container.name} still exists with documents")
        return VerificationResult(remaining_collections=remaining, issues=issues)

    def generate_report(self, result: CleanupResult) -> str:
        """Render a cleanup result as a Markdown report.

        Errors and Warnings sections appear only when non-empty.
        """
        lines = [
            f"# Phase 1 Cleanup Report for Tenant: {self.tenant_id}",
            "",
            "## Summary",
            f"- Success: {_yes_no(result.success)}",
            f"- Collections Removed: {result.summary.collections_removed}",
            f"- Documents Deleted: {result.summary.documents_deleted}",
            f"- Collections Merged: {result.summary.collections_merged}",
            f"- Documents Moved: {result.summary.documents_moved}",
            "",
        ]
        if result.errors:
            lines.append("## Errors")
            lines.extend(f"- {error}" for error in result.errors)
            lines.append("")
        if result.warnings:
            lines.append("## Warnings")
            lines.extend(f"- {warning}" for warning in result.warnings)
            lines.append("")
        lines.extend([
            "## Cleanup Actions",
            "- Removed duplicate collections (recruiter_*)",
            "- Removed stray locations collection",
            "- Removed legacy top-level jobOrders collection",
            f"- Preserved legacy data: {_yes_no(self.options.preserve_legacy)}",
            f"- Dry run: {_yes_no(self.options.dry_run)}",
        ])
        return "\n".join(lines) + "\n"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


async def run_legacy_cleanup(store: IDocumentStore, options: CleanupOptions) -> CleanupResult:
    """Run a cleanup with the given options."""
    return await LegacyCollectionCleanup(store, options).run_cleanup()


async def run_dry_run_cleanup(store: IDocumentStore, tenant_id: str) -> CleanupResult:
    """Report what a cleanup of the tenant would delete, without deleting."""
    options = CleanupOptions(tenant_id=tenant_id, dry_run=True)
    return await LegacyCollectionCleanup(store, options).run_cleanup()


async def verify_legacy_cleanup(store: IDocumentStore, tenant_id: str) -> VerificationResult:
    """List the tenant's legacy containers that still hold documents."""
    return await LegacyCollectionCleanup(store, CleanupOptions(tenant_id=tenant_id)).verify_cleanup()
