"""Firestore client construction (REST-based, no firebase-admin).

Clients are built explicitly from Settings and handed to the stores that
use them; there is no process-wide client. Credentials come from either
FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH
(file path). With FIRESTORE_EMULATOR_HOST set, no credentials are used.
"""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from tenant_schema.core.config import Settings
from tenant_schema.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from tenant_schema.infrastructure.firebase.document_store import FirestoreDocumentStore

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = settings.firebase_service_account_key.get_secret_value() if settings.firebase_service_account_key else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(settings: Settings) -> FirestoreRESTClient:
    """Build a Firestore REST client from settings.

    Raises:
        ValueError: If no usable credentials or project id are configured.
    """
    if settings.firestore_emulator_host:
        logger.info("Using Firestore emulator at %s", settings.firestore_emulator_host)
        return FirestoreRESTClient(
            settings.firestore_project_id,
            None,
            base_url=f"http://{settings.firestore_emulator_host}/v1",
            timeout=settings.firestore_timeout_seconds,
        )

    key_dict = _load_key_dict(settings)
    if not key_dict:
        raise ValueError("Firebase service account credentials could not be loaded")
    project_id = settings.firestore_project_id or key_dict.get("project_id")
    if not project_id:
        raise ValueError("Firebase service account JSON missing 'project_id'")
    cred = _get_credentials(key_dict)
    return FirestoreRESTClient(project_id, cred, timeout=settings.firestore_timeout_seconds)


@asynccontextmanager
async def firestore_store(settings: Settings) -> AsyncIterator[FirestoreDocumentStore]:
    """Yield a FirestoreDocumentStore and close its HTTP pool on exit."""
    client = create_firestore_client(settings)
    try:
        yield FirestoreDocumentStore(client)
    finally:
        await client.aclose()
        logger.debug("Firestore HTTP client closed")
