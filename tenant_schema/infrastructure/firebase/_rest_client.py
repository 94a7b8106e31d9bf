"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Avoids grpcio / firebase-admin so admin scripts install quickly.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Paths passed to this client are relative to the database's documents root
(e.g. "tenants/acme/jobOrders").
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from tenant_schema.application.dtos.documents import DocumentSnapshot
from tenant_schema.domain.exceptions import DocumentExistsError
from tenant_schema.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_fields,
    encode_document,
    encode_fields,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirestoreCommitError(Exception):
    """Raised when a batched commit is rejected; none of its writes were applied."""


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    doc_path: str | None = None,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        return None
    if resp.status_code == 409:
        raise DocumentExistsError(doc_path or url)
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self.path = path

    @property
    def id(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        await _request_async(
            self._client._http,
            self._client._url(self.path),
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            self._client._url(self.path),
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, self.path, decode_fields(out.get("fields")))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client._http,
            self._client._url(self.path),
            method="DELETE",
            access_token=await self._client.get_token(),
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
}


class _Query:
    """Fluent query over one collection; runs via runQuery (filter/limit on server)."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        collection_path: str,
        *,
        where_field: str | None = None,
        where_op: str = "EQUAL",
        where_value: Any = None,
    ):
        self._client = client
        parent, _, collection_id = collection_path.rpartition("/")
        self._parent = parent
        self._collection_id = collection_id
        self._where_field = where_field
        self._where_op = _OP_MAP.get(where_op, where_op)
        self._where_value = where_value
        self._limit: int = 100

    def limit(self, n: int) -> _Query:
        self._limit = n
        return self

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if self._where_field is not None:
            structured["where"] = {
                "fieldFilter": {
                    "field": {"fieldPath": self._where_field},
                    "op": self._where_op,
                    "value": _encode_value(self._where_value),
                }
            }
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        # Root collections are queried against the documents root itself.
        parent = self._client._documents_name(self._parent)
        resp = await _request_async(
            self._client._http,
            f"{self._client._base}/{parent}:runQuery",
            method="POST",
            body={"structuredQuery": self._structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            path = self._client._relative_path(doc.get("name", ""))
            yield DocumentSnapshot(
                path.rsplit("/", 1)[-1], path, decode_fields(doc.get("fields"))
            )


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self.path = path.strip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self.path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        url = f"{self._client._url(self.path)}?documentId={quote(document_id, safe='')}"
        await _request_async(
            self._client._http,
            url,
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            doc_path=f"{self.path}/{document_id}",
        )

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Use .limit(), then .stream()."""
        return _Query(
            self._client,
            self.path,
            where_field=field,
            where_op=op,
            where_value=value,
        )

    def limit(self, n: int) -> _Query:
        """Unfiltered query returning at most n documents."""
        return _Query(self._client, self.path).limit(n)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin).

    credentials may be None when talking to the emulator (base_url pointing
    at it); requests are then sent without an Authorization header.
    """

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = _BASE,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._base = base_url.rstrip("/")
        self._database = f"projects/{project_id}/databases/(default)"
        self._prefix = f"{self._database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    def _documents_name(self, path: str) -> str:
        return f"{self._prefix}/{path}" if path else self._prefix

    def _url(self, path: str) -> str:
        return f"{self._base}/{self._documents_name(path)}"

    def _relative_path(self, name: str) -> str:
        return name.split("/documents/", 1)[-1]

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._credentials is None:
            return None
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, path: str) -> CollectionReference:
        return CollectionReference(self, path)

    def document(self, path: str) -> DocumentReference:
        return DocumentReference(self, path)

    async def batch_write(self, writes: list[dict[str, Any]]) -> None:
        """Apply writes atomically in one commit.

        Each write is {"path": ..., "data": {...}} (full replace) or
        {"path": ..., "delete": True}. Firestore applies all of them or none.

        Raises:
            FirestoreCommitError: If the commit is rejected.
        """
        if not writes:
            return
        body_writes: list[dict[str, Any]] = []
        for write in writes:
            name = self._documents_name(write["path"])
            if write.get("delete"):
                body_writes.append({"delete": name})
            else:
                body_writes.append({"update": {"name": name, "fields": encode_fields(write["data"])}})
        try:
            await _request_async(
                self._http,
                f"{self._base}/{self._prefix}:commit",
                method="POST",
                body={"writes": body_writes},
                access_token=await self.get_token(),
            )
        except httpx.HTTPStatusError as e:
            raise FirestoreCommitError(
                f"Commit of {len(body_writes)} writes failed with HTTP {e.response.status_code}"
            ) from e
