"""Pytest configuration and fixtures for tenant_schema.

Cleanup and audit tests run against InMemoryDocumentStore; Firestore REST
tests use httpx.MockTransport. Integration tests need a Firestore emulator
and are marked requires_emulator.
"""

import os
import uuid

import pytest

from tenant_schema.core.config import Settings, get_settings
from tenant_schema.infrastructure.firebase import firestore_store
from tenant_schema.infrastructure.memory import InMemoryDocumentStore

TENANT_ID = "T1"
_EMULATOR_PROJECT = "demo-tenant-schema"


@pytest.fixture
def tenant_id() -> str:
    return TENANT_ID


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Empty in-memory store, fresh per test."""
    return InMemoryDocumentStore()


@pytest.fixture
def settings_env(monkeypatch):
    """Clear Firestore env vars and the settings cache around a test."""
    for name in (
        "FIREBASE_SERVICE_ACCOUNT_KEY",
        "FIREBASE_SERVICE_ACCOUNT_PATH",
        "FIRESTORE_EMULATOR_HOST",
        "FIRESTORE_PROJECT_ID",
        "CLEANUP_BATCH_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def emulator_tenant_id() -> str:
    """Unique tenant per test so emulator data from earlier runs never collides."""
    return f"it-{uuid.uuid4().hex[:12]}"


@pytest.fixture
async def emulator_store():
    """FirestoreDocumentStore against a local emulator.

    Requires FIRESTORE_EMULATOR_HOST (e.g. localhost:8080). Skips when it is
    not set; run without the emulator via: pytest -m 'not requires_emulator'.
    """
    host = os.environ.get("FIRESTORE_EMULATOR_HOST")
    if not host:
        pytest.skip(
            "Firestore emulator not configured: set FIRESTORE_EMULATOR_HOST, "
            "then run: gcloud emulators firestore start"
        )
    settings = Settings(
        _env_file=None,
        firestore_emulator_host=host,
        firestore_project_id=os.environ.get("FIRESTORE_PROJECT_ID", _EMULATOR_PROJECT),
    )
    async with firestore_store(settings) as emulator:
        yield emulator
