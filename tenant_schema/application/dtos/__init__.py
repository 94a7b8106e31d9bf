"""Application DTOs (no dependency on a concrete document store)."""

from tenant_schema.application.dtos.audit import (
    AuditResult,
    AuditSummary,
    CollectionInfo,
)
from tenant_schema.application.dtos.cleanup import (
    DEFAULT_BATCH_SIZE,
    MAX_BATCH_SIZE,
    CleanupOptions,
    CleanupResult,
    CleanupSummary,
    PhaseResult,
    VerificationResult,
)
from tenant_schema.application.dtos.documents import ContainerRef, DocumentSnapshot

__all__ = [
    "AuditResult",
    "AuditSummary",
    "CollectionInfo",
    "DEFAULT_BATCH_SIZE",
    "MAX_BATCH_SIZE",
    "CleanupOptions",
    "CleanupResult",
    "CleanupSummary",
    "PhaseResult",
    "VerificationResult",
    "ContainerRef",
    "DocumentSnapshot",
]
