"""Application ports: protocols implemented by the infrastructure layer."""

from tenant_schema.application.interfaces.document_store import IDocumentStore

__all__ = ["IDocumentStore"]
