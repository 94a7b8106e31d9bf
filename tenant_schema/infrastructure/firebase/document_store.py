"""Firestore-backed document store (implements IDocumentStore)."""

from __future__ import annotations

from typing import Any

from tenant_schema.application.dtos.documents import ContainerRef, DocumentSnapshot
from tenant_schema.infrastructure.firebase._rest_client import FirestoreRESTClient


class FirestoreDocumentStore:
    """IDocumentStore over the Firestore REST client.

    Page fetches carry no cursor: every call reads from the start of the
    collection, so deletion loops terminate by draining it.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def _query(self, container: ContainerRef, limit: int) -> list[DocumentSnapshot]:
        coll = self._client.collection(container.path)
        if container.filter_field is not None:
            query = coll.where(container.filter_field, "==", container.filter_value).limit(limit)
        else:
            query = coll.limit(limit)
        return [snapshot async for snapshot in query.stream()]

    async def probe(self, container: ContainerRef, limit: int = 1) -> list[DocumentSnapshot]:
        """Return at most limit documents (server-side limit)."""
        return await self._query(container, limit)

    async def fetch_page(self, container: ContainerRef, limit: int) -> list[DocumentSnapshot]:
        """Return up to limit documents from the start of the collection."""
        return await self._query(container, limit)

    async def atomic_delete_many(self, paths: list[str]) -> None:
        """Delete the documents in a single commit (all or nothing)."""
        await self._client.batch_write([{"path": path, "delete": True} for path in paths])

    async def get(self, path: str) -> DocumentSnapshot | None:
        return await self._client.document(path).get()

    async def create(self, path: str, data: dict[str, Any]) -> None:
        """Create the document; DocumentExistsError if it exists (atomic via doc ID)."""
        parent, _, document_id = path.rpartition("/")
        await self._client.collection(parent).create(document_id, data)

    async def delete(self, path: str) -> None:
        await self._client.document(path).delete()
