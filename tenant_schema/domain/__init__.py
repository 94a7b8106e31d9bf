"""Domain layer: canonical paths, legacy containers, change filter, and exceptions.

No dependencies on infrastructure. Used by application and infrastructure
layers.
"""

from tenant_schema.domain.change_filter import (
    DEFAULT_IGNORE_FIELDS,
    is_meaningful_change,
    sanitize,
)
from tenant_schema.domain.exceptions import (
    CleanupLeaseHeldError,
    DocumentExistsError,
    InvalidPathError,
    TenantSchemaException,
)
from tenant_schema.domain.legacy import (
    LEGACY_CONTAINERS,
    CleanupPhase,
    LegacyContainer,
)
from tenant_schema.domain.paths import (
    CanonicalPaths,
    is_missing_tenant_id,
    is_recruiter_legacy,
    is_top_level_job_orders,
    p,
    require_tenant_id,
    validate_canonical,
    warn_legacy_usage,
)

__all__ = [
    # Paths
    "CanonicalPaths",
    "p",
    "is_missing_tenant_id",
    "is_recruiter_legacy",
    "is_top_level_job_orders",
    "require_tenant_id",
    "validate_canonical",
    "warn_legacy_usage",
    # Legacy containers
    "LEGACY_CONTAINERS",
    "CleanupPhase",
    "LegacyContainer",
    # Change filter
    "DEFAULT_IGNORE_FIELDS",
    "is_meaningful_change",
    "sanitize",
    # Exceptions
    "CleanupLeaseHeldError",
    "DocumentExistsError",
    "InvalidPathError",
    "TenantSchemaException",
]
