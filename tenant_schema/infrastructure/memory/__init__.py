"""In-memory document store for tests and local dry runs."""

from tenant_schema.infrastructure.memory.document_store import InMemoryDocumentStore

__all__ = ["InMemoryDocumentStore"]
