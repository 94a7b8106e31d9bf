"""Domain exceptions for tenant schema paths and legacy cleanup.

Defines domain-level exceptions that represent rule violations (a path
outside its tenant partition, a cleanup lease held by another run). They
are independent of the document store; store failures surface as the
store client's own exceptions and are recorded by the cleanup service.
"""

from typing import Any


class TenantSchemaException(Exception):
    """Base exception for all tenant schema errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. path, tenant_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class InvalidPathError(TenantSchemaException):
    """Raised when a document path is not scoped to the expected tenant.

    Always caller-recoverable (fix the path); never retried.
    """

    def __init__(self, path: str, tenant_id: str) -> None:
        """Initialize with the offending path and the expected tenant.

        Args:
            path: The path that failed validation.
            tenant_id: The tenant ID the path was expected to contain.
        """
        super().__init__(
            f"Path '{path}' is not scoped to tenant '{tenant_id}'",
            "INVALID_PATH",
            {"path": path, "tenant_id": tenant_id},
        )


class CleanupLeaseHeldError(TenantSchemaException):
    """Raised when another cleanup run holds the tenant's advisory lease."""

    def __init__(self, tenant_id: str, owner: str | None = None) -> None:
        """Initialize with the tenant and the current lease owner (if known).

        Args:
            tenant_id: Tenant whose lease is held.
            owner: Owner recorded on the existing lease document.
        """
        super().__init__(
            f"Cleanup lease for tenant '{tenant_id}' is held by {owner or 'another run'}",
            "CLEANUP_LEASE_HELD",
            {"tenant_id": tenant_id, "owner": owner},
        )


class DocumentExistsError(TenantSchemaException):
    """Raised by a document store when creating a document whose path already exists."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Document already exists: {path}",
            "DOCUMENT_EXISTS",
            {"path": path},
        )
