"""Audit a tenant's collections before (or after) legacy cleanup.

Firestore cannot list subcollections from a client, so the audit probes a
fixed list of known collection names, samples documents from each one that
holds data, and reports duplicates, documents missing tenantId, missing
required fields and legacy layouts.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from tenant_schema.application.dtos.audit import AuditResult, CollectionInfo
from tenant_schema.application.dtos.documents import ContainerRef
from tenant_schema.application.interfaces.document_store import IDocumentStore
from tenant_schema.application.services.legacy_cleanup import TENANT_ID_FIELD, container_ref
from tenant_schema.domain.legacy import TOP_LEVEL_JOB_ORDERS
from tenant_schema.domain.paths import p
from tenant_schema.shared.telemetry.logging import get_logger
from tenant_schema.shared.telemetry.tracing import traced

logger = get_logger(__name__)

SAMPLE_SIZE = 10
TOP_LEVEL_JOB_ORDERS_NAME = "jobOrders (top-level)"

KNOWN_COLLECTIONS: tuple[str, ...] = (
    "crm_companies",
    "crm_contacts",
    "crm_deals",
    "crm_locations",
    "recruiter_jobOrders",
    "recruiter_candidates",
    "recruiter_applications",
    "recruiter_assignments",
    "recruiter_jobsBoardPosts",
    "locations",
    "jobOrders",
    "jobBoardPosts",
    "applications",
    "candidates",
    "assignments",
    "userGroups",
    "users",
    "tasks",
    "settings",
    "aiSettings",
    "branding",
    "integrations",
    "aiTraining",
    "modules",
    "counters",
)

# Canonical name first, superseded name second.
DUPLICATE_PAIRS: tuple[tuple[str, str], ...] = (
    ("jobOrders", "recruiter_jobOrders"),
    ("locations", "crm_locations"),
    ("applications", "recruiter_applications"),
    ("candidates", "recruiter_candidates"),
    ("assignments", "recruiter_assignments"),
)

REQUIRED_FIELDS: dict[str, Callable[[dict[str, Any]], bool]] = {
    "crm_companies": lambda d: bool(d.get("name") or d.get("companyName")),
    "crm_contacts": lambda d: bool(d.get("fullName") or (d.get("firstName") and d.get("lastName"))),
    "recruiter_jobOrders": lambda d: bool(d.get("title") and d.get("status")),
    "applications": lambda d: bool(d.get("candidateId") and d.get("status")),
    "userGroups": lambda d: bool(d.get("groupName") and d.get("members")),
    "users": lambda d: bool(d.get("email") and d.get("role")),
}


def has_required_fields(collection_name: str, data: dict[str, Any]) -> bool:
    """Collection-specific required-field check; unknown collections always pass."""
    check = REQUIRED_FIELDS.get(collection_name)
    return check(data) if check else True


class CollectionAuditor:
    """Audits the known collections of one tenant."""

    def __init__(self, store: IDocumentStore, tenant_id: str) -> None:
        self._store = store
        self.tenant_id = tenant_id

    def _targets(self) -> list[tuple[str, ContainerRef]]:
        tenant_root = p.tenant(self.tenant_id)
        targets = [(name, ContainerRef(f"{tenant_root}/{name}")) for name in KNOWN_COLLECTIONS]
        targets.append((TOP_LEVEL_JOB_ORDERS_NAME, container_ref(TOP_LEVEL_JOB_ORDERS, self.tenant_id)))
        return targets

    @traced("collection_audit.run")
    async def run_audit(self) -> AuditResult:
        """Audit every known collection that holds documents."""
        logger.info("Starting collection audit for tenant %s", self.tenant_id)
        result = AuditResult(tenant_id=self.tenant_id)
        try:
            tenant_doc = await self._store.get(p.tenant(self.tenant_id))
            if tenant_doc is None:
                raise LookupError(f"Tenant {self.tenant_id} does not exist")

            for name, ref in self._targets():
                info = await self._audit_collection(name, ref)
                if info is None:
                    continue
                result.collections.append(info)
                if info.issues:
                    result.summary.collections_with_issues += 1
                result.summary.total_documents += info.document_count

            result.summary.total_collections = len(result.collections)
            result.duplicates = self._identify_duplicates(result.collections)
            result.summary.duplicate_collections = len(result.duplicates)
            result.missing_tenant_ids = [c.name for c in result.collections if not c.has_tenant_id]
            result.recommendations = self._recommendations(result)
            logger.info(
                "Audit completed for tenant %s: %d collections, %d sampled documents",
                self.tenant_id,
                result.summary.total_collections,
                result.summary.total_documents,
            )
        except Exception as e:
            logger.exception("Audit failed for tenant %s", self.tenant_id)
            result.recommendations.append(f"Audit failed: {e}")
        return result

    async def _audit_collection(self, name: str, ref: ContainerRef) -> CollectionInfo | None:
        """Sample a collection; None when it holds no documents."""
        info = CollectionInfo(name=name, path=ref.path)
        try:
            sample = await self._store.probe(ref, limit=SAMPLE_SIZE)
        except Exception as e:
            info.issues.append(f"Error accessing collection: {e}")
            return info
        if not sample:
            return None

        info.document_count = len(sample)
        info.sample_documents = [{"id": doc.id, **doc.to_dict()} for doc in sample]
        with_tenant = sum(
            1 for doc in sample if doc.to_dict().get(TENANT_ID_FIELD) == self.tenant_id
        )
        with_required = sum(1 for doc in sample if has_required_fields(name, doc.to_dict()))
        info.has_tenant_id = with_tenant == len(sample)
        info.has_required_fields = with_required == len(sample)
        if not info.has_tenant_id:
            info.issues.append(
                f"Missing tenantId in {len(sample) - with_tenant}/{len(sample)} documents"
            )
        if not info.has_required_fields:
            info.issues.append(
                f"Missing required fields in {len(sample) - with_required}/{len(sample)} documents"
            )
        self._collection_specific_issues(info)
        return info

    @staticmethod
    def _collection_specific_issues(info: CollectionInfo) -> None:
        if info.name == TOP_LEVEL_JOB_ORDERS_NAME:
            info.issues.append(
                "Legacy top-level jobOrders collection - should be moved to tenant level"
            )
        elif info.name == "locations":
            info.issues.append(
                "Stray locations collection - should be under crm_companies/{companyId}/locations"
            )
        elif info.name == "recruiter_jobOrders":
            if any(not doc.get("crmCompanyId") for doc in info.sample_documents):
                info.issues.append("Some job orders missing crmCompanyId reference")
        elif info.name == "crm_contacts":
            if any(not doc.get("companyId") for doc in info.sample_documents):
                info.issues.append("Some contacts missing companyId reference")

    @staticmethod
    def _identify_duplicates(collections: list[CollectionInfo]) -> list[str]:
        names = {c.name for c in collections}
        duplicates: list[str] = []
        for pair in DUPLICATE_PAIRS:
            if all(name in names for name in pair):
                duplicates.extend(name for name in pair if name not in duplicates)
        return duplicates

    @staticmethod
    def _recommendations(result: AuditResult) -> list[str]:
        names = {c.name for c in result.collections}
        recommendations: list[str] = []
        if result.duplicates:
            recommendations.append(f"Remove duplicate collections: {', '.join(result.duplicates)}")
        if result.missing_tenant_ids:
            recommendations.append(
                f"Add tenantId to collections: {', '.join(result.missing_tenant_ids)}"
            )
        with_issues = [c.name for c in result.collections if c.issues]
        if with_issues:
            recommendations.append(f"Fix issues in collections: {', '.join(with_issues)}")
        if TOP_LEVEL_JOB_ORDERS_NAME in names:
            recommendations.append("Move legacy jobOrders collection to tenant level")
        if "locations" in names:
            recommendations.append("Move stray locations collection under crm_companies")
        if "jobOrders" not in names:
            recommendations.append("Create new jobOrders subcollection at tenant level")
        if "applications" not in names:
            recommendations.append("Create applications subcollection at tenant level")
        if "userGroups" not in names:
            recommendations.append("Create userGroups subcollection at tenant level")
        return recommendations

    def generate_report(self, result: AuditResult) -> str:
        """Render an audit result as a Markdown report."""
        lines = [
            f"# Collection Audit Report for Tenant: {result.tenant_id}",
            "",
            "## Summary",
            f"- Total Collections: {result.summary.total_collections}",
            f"- Total Documents: {result.summary.total_documents}",
            f"- Duplicate Collections: {result.summary.duplicate_collections}",
            f"- Collections with Issues: {result.summary.collections_with_issues}",
            "",
        ]
        if result.duplicates:
            lines.append("## Duplicate Collections")
            lines.extend(f"- {name}" for name in result.duplicates)
            lines.append("")
        if result.missing_tenant_ids:
            lines.append("## Collections Missing tenantId")
            lines.extend(f"- {name}" for name in result.missing_tenant_ids)
            lines.append("")
        lines.append("## Collection Details")
        for info in result.collections:
            lines.extend([
                f"### {info.name}",
                f"- Path: {info.path}",
                f"- Documents: {info.document_count}",
                f"- Has tenantId: {'Yes' if info.has_tenant_id else 'No'}",
                f"- Has required fields: {'Yes' if info.has_required_fields else 'No'}",
            ])
            if info.issues:
                lines.append("- Issues:")
                lines.extend(f"  - {issue}" for issue in info.issues)
            lines.append("")
        lines.append("## Recommendations")
        lines.extend(f"- {rec}" for rec in result.recommendations)
        return "\n".join(lines) + "\n"


async def run_collection_audit(store: IDocumentStore, tenant_id: str) -> AuditResult:
    """Run an audit for a tenant."""
    return await CollectionAuditor(store, tenant_id).run_audit()
