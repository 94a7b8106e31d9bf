"""Legacy collections superseded by the canonical layout.

Each entry names a container from an earlier schema generation, what
replaced it, and the cleanup phase that removes it. Legacy containers are
only ever scanned and deleted; nothing writes to them.
"""

from dataclasses import dataclass
from enum import Enum

from tenant_schema.domain.collections import COLLECTION_JOB_ORDERS, COLLECTION_LOCATIONS
from tenant_schema.domain.paths import p


class CleanupPhase(str, Enum):
    """Cleanup phases, in the order a run executes them."""

    DUPLICATE_COLLECTIONS = "duplicate_collections"
    STRAY_LOCATIONS = "stray_locations"
    LEGACY_JOB_ORDERS = "legacy_job_orders"


@dataclass(frozen=True)
class LegacyContainer:
    """A superseded collection.

    Attributes:
        name: Collection name as it appears in the store.
        superseded_by: Human-readable canonical replacement.
        phase: Cleanup phase that removes it.
        top_level: True for collections at the database root from before
            tenant scoping; their documents are attributed to a tenant by
            their tenantId field.
    """

    name: str
    superseded_by: str
    phase: CleanupPhase
    top_level: bool = False

    def path_for(self, tenant_id: str) -> str:
        """Collection path to scan for this tenant."""
        if self.top_level:
            return self.name
        return f"{p.tenant(tenant_id)}/{self.name}"


DUPLICATE_CONTAINERS: tuple[LegacyContainer, ...] = (
    LegacyContainer("recruiter_jobOrders", "jobOrders", CleanupPhase.DUPLICATE_COLLECTIONS),
    LegacyContainer("recruiter_applications", "applications", CleanupPhase.DUPLICATE_COLLECTIONS),
    LegacyContainer("recruiter_candidates", "candidates", CleanupPhase.DUPLICATE_COLLECTIONS),
    LegacyContainer("recruiter_assignments", "assignments", CleanupPhase.DUPLICATE_COLLECTIONS),
    LegacyContainer("recruiter_jobsBoardPosts", "jobBoardPosts", CleanupPhase.DUPLICATE_COLLECTIONS),
    LegacyContainer("crm_locations", "crm_companies/{id}/locations", CleanupPhase.DUPLICATE_COLLECTIONS),
)

STRAY_LOCATIONS = LegacyContainer(
    COLLECTION_LOCATIONS,
    "crm_companies/{id}/locations",
    CleanupPhase.STRAY_LOCATIONS,
)

TOP_LEVEL_JOB_ORDERS = LegacyContainer(
    COLLECTION_JOB_ORDERS,
    "tenants/{tenantId}/jobOrders",
    CleanupPhase.LEGACY_JOB_ORDERS,
    top_level=True,
)

LEGACY_CONTAINERS: tuple[LegacyContainer, ...] = (
    *DUPLICATE_CONTAINERS,
    STRAY_LOCATIONS,
    TOP_LEVEL_JOB_ORDERS,
)


def containers_for_phase(phase: CleanupPhase) -> tuple[LegacyContainer, ...]:
    return tuple(c for c in LEGACY_CONTAINERS if c.phase is phase)
