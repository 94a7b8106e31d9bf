"""Document store interface (port) for the application layer.

The protocol defines the contract that store implementations must fulfill
(DIP). Both the Firestore REST store and the in-memory store satisfy it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from tenant_schema.application.dtos.documents import ContainerRef, DocumentSnapshot


class IDocumentStore(Protocol):
    """Protocol for a tenant-partitioned document store (DIP)."""

    async def probe(self, container: ContainerRef, limit: int = 1) -> list[DocumentSnapshot]:
        """Return at most limit documents of the container (existence check)."""

    async def fetch_page(self, container: ContainerRef, limit: int) -> list[DocumentSnapshot]:
        """Return up to limit documents from the start of the container (no cursor)."""

    async def atomic_delete_many(self, paths: list[str]) -> None:
        """Delete all given documents in one all-or-nothing write."""

    async def get(self, path: str) -> DocumentSnapshot | None:
        """Return the document at path, or None if it does not exist."""

    async def create(self, path: str, data: dict[str, Any]) -> None:
        """Create the document; raise DocumentExistsError if it exists."""

    async def delete(self, path: str) -> None:
        """Delete the document. Idempotent if it is already missing."""
