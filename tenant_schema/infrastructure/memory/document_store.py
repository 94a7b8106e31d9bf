"""In-memory document store (implements IDocumentStore).

Keeps documents in a dict keyed by full path. Used by tests and for local
dry runs against seeded data. Documents are listed in insertion order,
which stands in for Firestore's document-id order.
"""

from __future__ import annotations

import copy
from typing import Any

from tenant_schema.application.dtos.documents import ContainerRef, DocumentSnapshot
from tenant_schema.domain.exceptions import DocumentExistsError


def _parent_of(path: str) -> str:
    return path.rsplit("/", 1)[0] if "/" in path else ""


class InMemoryDocumentStore:
    """Process-local store with Firestore-like collection semantics.

    commits records the size of every atomic_delete_many call so tests can
    check batching.
    """

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self._docs: dict[str, dict[str, Any]] = {}
        self.commits: list[int] = []
        for path, data in (documents or {}).items():
            self.set(path, data)

    def set(self, path: str, data: dict[str, Any]) -> None:
        """Create or overwrite a document (seeding helper)."""
        if path.count("/") % 2 != 1:
            raise ValueError(f"Not a document path: {path!r}")
        self._docs[path] = copy.deepcopy(data)

    def seed_collection(
        self,
        collection_path: str,
        count: int,
        data: dict[str, Any] | None = None,
        prefix: str = "doc",
    ) -> list[str]:
        """Add count documents to a collection; return their paths."""
        paths = [f"{collection_path}/{prefix}-{i:05d}" for i in range(count)]
        for path in paths:
            self.set(path, data or {})
        return paths

    def count(self, collection_path: str) -> int:
        return sum(1 for path in self._docs if _parent_of(path) == collection_path)

    def _list(self, container: ContainerRef, limit: int) -> list[DocumentSnapshot]:
        out: list[DocumentSnapshot] = []
        for path, data in self._docs.items():
            if len(out) >= limit:
                break
            if _parent_of(path) != container.path or not container.matches(data):
                continue
            out.append(DocumentSnapshot(path.rsplit("/", 1)[-1], path, copy.deepcopy(data)))
        return out

    async def probe(self, container: ContainerRef, limit: int = 1) -> list[DocumentSnapshot]:
        return self._list(container, limit)

    async def fetch_page(self, container: ContainerRef, limit: int) -> list[DocumentSnapshot]:
        return self._list(container, limit)

    async def atomic_delete_many(self, paths: list[str]) -> None:
        self.commits.append(len(paths))
        for path in paths:
            self._docs.pop(path, None)

    async def get(self, path: str) -> DocumentSnapshot | None:
        data = self._docs.get(path)
        if data is None:
            return None
        return DocumentSnapshot(path.rsplit("/", 1)[-1], path, copy.deepcopy(data))

    async def create(self, path: str, data: dict[str, Any]) -> None:
        if path in self._docs:
            raise DocumentExistsError(path)
        self.set(path, data)

    async def delete(self, path: str) -> None:
        self._docs.pop(path, None)
