"""FirestoreDocumentStore over the REST client, against a fake Firestore (httpx.MockTransport)."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from tenant_schema.application.dtos.cleanup import CleanupOptions
from tenant_schema.application.dtos.documents import ContainerRef
from tenant_schema.application.services.legacy_cleanup import LegacyCollectionCleanup
from tenant_schema.domain.exceptions import DocumentExistsError
from tenant_schema.infrastructure.firebase._rest_client import (
    FirestoreCommitError,
    FirestoreRESTClient,
)
from tenant_schema.infrastructure.firebase._rest_encoding import decode_fields, encode_fields
from tenant_schema.infrastructure.firebase.document_store import FirestoreDocumentStore

PROJECT = "demo-project"
DOCS_ROOT = f"projects/{PROJECT}/databases/(default)/documents"
BASE = "https://firestore.test/v1"


class FakeFirestore:
    """Minimal Firestore REST backend: runQuery, commit, get, create, delete."""

    def __init__(self, documents: dict[str, dict] | None = None) -> None:
        self.documents: dict[str, dict] = dict(documents or {})
        self.requests: list[httpx.Request] = []
        self.commit_sizes: list[int] = []
        self.fail_commit = False

    def _name(self, path: str) -> str:
        return f"{DOCS_ROOT}/{path}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url).removeprefix(f"{BASE}/")
        body = json.loads(request.content) if request.content else None
        if url.endswith(":runQuery"):
            return self._run_query(url.removesuffix(":runQuery"), body["structuredQuery"])
        if url == f"{DOCS_ROOT}:commit":
            return self._commit(body["writes"])
        path = url.split("?", 1)[0].removeprefix(f"{DOCS_ROOT}/")
        if request.method == "POST":
            doc_id = request.url.params["documentId"]
            full = f"{path}/{doc_id}"
            if full in self.documents:
                return httpx.Response(409, json={"error": {"status": "ALREADY_EXISTS"}})
            self.documents[full] = decode_fields(body["fields"])
            return httpx.Response(200, json={"name": self._name(full)})
        if request.method == "DELETE":
            self.documents.pop(path, None)
            return httpx.Response(200, json={})
        if path not in self.documents:
            return httpx.Response(404, json={"error": {"status": "NOT_FOUND"}})
        return httpx.Response(
            200, json={"name": self._name(path), "fields": encode_fields(self.documents[path])}
        )

    def _run_query(self, parent: str, query: dict) -> httpx.Response:
        parent_path = parent.removeprefix(DOCS_ROOT).strip("/")
        collection = query["from"][0]["collectionId"]
        coll_path = f"{parent_path}/{collection}" if parent_path else collection
        where = query.get("where", {}).get("fieldFilter")
        out = []
        for path, data in self.documents.items():
            if path.rsplit("/", 1)[0] != coll_path:
                continue
            if where:
                expected = decode_fields({"v": where["value"]})["v"]
                if data.get(where["field"]["fieldPath"]) != expected:
                    continue
            out.append({"document": {"name": self._name(path), "fields": encode_fields(data)}})
            if len(out) >= query.get("limit", 100):
                break
        return httpx.Response(200, json=out or [{"readTime": "2024-01-01T00:00:00Z"}])

    def _commit(self, writes: list[dict]) -> httpx.Response:
        if self.fail_commit:
            return httpx.Response(400, json={"error": {"status": "INVALID_ARGUMENT"}})
        self.commit_sizes.append(len(writes))
        for write in writes:
            self.documents.pop(write["delete"].removeprefix(f"{DOCS_ROOT}/"), None)
        return httpx.Response(200, json={"writeResults": [{} for _ in writes]})


class _StaticCredentials:
    valid = True
    token = "test-token"


def _client(fake: FakeFirestore, credentials=None) -> FirestoreRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    return FirestoreRESTClient(PROJECT, credentials, http_client=http, base_url=BASE)


@pytest.fixture
def fake() -> FakeFirestore:
    return FakeFirestore()


async def test_probe_nested_collection_uses_run_query_with_limit(fake: FakeFirestore) -> None:
    fake.documents["tenants/T1/recruiter_jobOrders/a"] = {"title": "Picker"}
    fake.documents["tenants/T1/recruiter_jobOrders/b"] = {"title": "Packer"}
    store = FirestoreDocumentStore(_client(fake))

    found = await store.probe(ContainerRef("tenants/T1/recruiter_jobOrders"), limit=1)

    assert [(d.id, d.path, d.to_dict()) for d in found] == [
        ("a", "tenants/T1/recruiter_jobOrders/a", {"title": "Picker"})
    ]
    request = fake.requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{BASE}/{DOCS_ROOT}/tenants/T1:runQuery"
    query = json.loads(request.content)["structuredQuery"]
    assert query == {"from": [{"collectionId": "recruiter_jobOrders"}], "limit": 1}


async def test_probe_root_collection_with_tenant_filter(fake: FakeFirestore) -> None:
    fake.documents["jobOrders/x"] = {"tenantId": "T2"}
    fake.documents["jobOrders/y"] = {"tenantId": "T1"}
    store = FirestoreDocumentStore(_client(fake))

    found = await store.probe(ContainerRef("jobOrders", "tenantId", "T1"), limit=5)

    assert [d.path for d in found] == ["jobOrders/y"]
    request = fake.requests[0]
    assert str(request.url) == f"{BASE}/{DOCS_ROOT}:runQuery"
    where = json.loads(request.content)["structuredQuery"]["where"]["fieldFilter"]
    assert where == {
        "field": {"fieldPath": "tenantId"},
        "op": "EQUAL",
        "value": {"stringValue": "T1"},
    }


async def test_empty_query_result_is_empty_list(fake: FakeFirestore) -> None:
    store = FirestoreDocumentStore(_client(fake))
    assert await store.probe(ContainerRef("tenants/T1/crm_locations")) == []


async def test_atomic_delete_many_sends_one_commit(fake: FakeFirestore) -> None:
    fake.documents["tenants/T1/locations/a"] = {}
    fake.documents["tenants/T1/locations/b"] = {}
    store = FirestoreDocumentStore(_client(fake))

    await store.atomic_delete_many(["tenants/T1/locations/a", "tenants/T1/locations/b"])

    assert fake.commit_sizes == [2]
    assert fake.documents == {}
    body = json.loads(fake.requests[0].content)
    assert body == {
        "writes": [
            {"delete": f"{DOCS_ROOT}/tenants/T1/locations/a"},
            {"delete": f"{DOCS_ROOT}/tenants/T1/locations/b"},
        ]
    }


async def test_rejected_commit_raises(fake: FakeFirestore) -> None:
    fake.fail_commit = True
    store = FirestoreDocumentStore(_client(fake))
    with pytest.raises(FirestoreCommitError):
        await store.atomic_delete_many(["tenants/T1/locations/a"])


async def test_atomic_delete_many_with_no_paths_sends_nothing(fake: FakeFirestore) -> None:
    store = FirestoreDocumentStore(_client(fake))
    await store.atomic_delete_many([])
    assert fake.requests == []


async def test_create_get_delete_round_trip(fake: FakeFirestore) -> None:
    store = FirestoreDocumentStore(_client(fake))
    when = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    path = "tenants/T1/monitoring/cleanupLease"

    await store.create(path, {"owner": "cron", "expiresAt": when, "attempt": 2})
    with pytest.raises(DocumentExistsError):
        await store.create(path, {"owner": "other"})

    snapshot = await store.get(path)
    assert snapshot is not None
    assert snapshot.id == "cleanupLease"
    assert snapshot.to_dict() == {"owner": "cron", "expiresAt": when, "attempt": 2}

    await store.delete(path)
    assert await store.get(path) is None


async def test_authorization_header(fake: FakeFirestore) -> None:
    await FirestoreDocumentStore(_client(fake)).get("tenants/T1")
    await FirestoreDocumentStore(_client(fake, _StaticCredentials())).get("tenants/T1")
    assert "authorization" not in fake.requests[0].headers
    assert fake.requests[1].headers["authorization"] == "Bearer test-token"


async def test_cleanup_batches_through_rest_store(fake: FakeFirestore) -> None:
    for i in range(7):
        fake.documents[f"tenants/T1/recruiter_candidates/c{i}"] = {"n": i}
    fake.documents["tenants/T1/jobOrders/keep"] = {"title": "canonical"}
    store = FirestoreDocumentStore(_client(fake))

    result = await LegacyCollectionCleanup(
        store, CleanupOptions(tenant_id="T1", batch_size=3)
    ).run_cleanup()

    assert result.summary.documents_deleted == 7
    assert result.summary.collections_removed == 1
    assert fake.commit_sizes == [3, 3, 1]
    assert list(fake.documents) == ["tenants/T1/jobOrders/keep"]


def test_timestamp_with_nanoseconds_decodes() -> None:
    decoded = decode_fields({"t": {"timestampValue": "2024-05-01T12:30:00.123456789Z"}})
    assert decoded["t"] == datetime(2024, 5, 1, 12, 30, 0, 123456, tzinfo=timezone.utc)
