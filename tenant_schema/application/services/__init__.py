"""Application services: legacy cleanup, cleanup lease, and collection audit."""

from tenant_schema.application.services.cleanup_lease import CleanupLease
from tenant_schema.application.services.collection_audit import (
    CollectionAuditor,
    run_collection_audit,
)
from tenant_schema.application.services.legacy_cleanup import (
    LegacyCollectionCleanup,
    run_dry_run_cleanup,
    run_legacy_cleanup,
    verify_legacy_cleanup,
)

__all__ = [
    "CleanupLease",
    "CollectionAuditor",
    "run_collection_audit",
    "LegacyCollectionCleanup",
    "run_dry_run_cleanup",
    "run_legacy_cleanup",
    "verify_legacy_cleanup",
]
