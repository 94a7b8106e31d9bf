"""DTOs for tenant collection audits."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CollectionInfo:
    """Audit findings for one collection under a tenant."""

    name: str
    path: str
    document_count: int = 0
    sample_documents: list[dict[str, Any]] = field(default_factory=list)
    has_tenant_id: bool = False
    has_required_fields: bool = False
    issues: list[str] = field(default_factory=list)


@dataclass
class AuditSummary:
    total_collections: int = 0
    total_documents: int = 0
    duplicate_collections: int = 0
    collections_with_issues: int = 0


@dataclass
class AuditResult:
    """Result of auditing every known collection of a tenant."""

    tenant_id: str
    collections: list[CollectionInfo] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    missing_tenant_ids: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    summary: AuditSummary = field(default_factory=AuditSummary)
