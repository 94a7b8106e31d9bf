"""Firestore integration over the REST API."""

from tenant_schema.infrastructure.firebase._rest_client import (
    FirestoreCommitError,
    FirestoreRESTClient,
)
from tenant_schema.infrastructure.firebase.client import (
    create_firestore_client,
    firestore_store,
)
from tenant_schema.infrastructure.firebase.document_store import FirestoreDocumentStore

__all__ = [
    "FirestoreCommitError",
    "FirestoreRESTClient",
    "FirestoreDocumentStore",
    "create_firestore_client",
    "firestore_store",
]
