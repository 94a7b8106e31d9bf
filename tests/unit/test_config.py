"""Settings validation and Firestore client construction."""

import json

import pytest
from pydantic import ValidationError

from tenant_schema.core.config import Settings, get_settings
from tenant_schema.infrastructure.firebase.client import _load_key_dict, create_firestore_client


def test_missing_credentials_rejected(settings_env) -> None:
    with pytest.raises(ValidationError, match="FIREBASE_SERVICE_ACCOUNT_KEY"):
        Settings(_env_file=None)


def test_emulator_requires_project_id(settings_env) -> None:
    settings_env.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")
    with pytest.raises(ValidationError, match="FIRESTORE_PROJECT_ID"):
        Settings(_env_file=None)


def test_emulator_with_project_id(settings_env) -> None:
    settings_env.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")
    settings_env.setenv("FIRESTORE_PROJECT_ID", "demo-project")
    settings = Settings(_env_file=None)
    assert settings.cleanup_batch_size == 100
    assert settings.cleanup_dry_run is False
    assert settings.cleanup_preserve_legacy is True


@pytest.mark.parametrize("batch_size", ["0", "501"])
def test_batch_size_bounds(settings_env, batch_size: str) -> None:
    settings_env.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")
    settings_env.setenv("FIRESTORE_PROJECT_ID", "demo-project")
    settings_env.setenv("CLEANUP_BATCH_SIZE", batch_size)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached(settings_env) -> None:
    settings_env.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")
    settings_env.setenv("FIRESTORE_PROJECT_ID", "demo-project")
    assert get_settings() is get_settings()


async def test_emulator_client_sends_no_credentials(settings_env) -> None:
    settings = Settings(
        _env_file=None,
        firestore_emulator_host="localhost:8080",
        firestore_project_id="demo-project",
    )
    client = create_firestore_client(settings)
    try:
        assert client.project_id == "demo-project"
        assert client._url("tenants/T1") == (
            "http://localhost:8080/v1/projects/demo-project/databases/(default)/documents/tenants/T1"
        )
        assert await client.get_token() is None
    finally:
        await client.aclose()


def test_key_must_be_json(settings_env) -> None:
    settings = Settings(_env_file=None, firebase_service_account_key="not json")
    with pytest.raises(ValueError, match="not valid JSON"):
        _load_key_dict(settings)


def test_key_file_is_loaded(settings_env, tmp_path) -> None:
    key_file = tmp_path / "sa.json"
    key_file.write_text(json.dumps({"project_id": "from-file"}), encoding="utf-8")
    settings = Settings(_env_file=None, firebase_service_account_path=str(key_file))
    assert _load_key_dict(settings) == {"project_id": "from-file"}


def test_missing_key_file_yields_no_client(settings_env, tmp_path) -> None:
    settings = Settings(_env_file=None, firebase_service_account_path=str(tmp_path / "nope.json"))
    assert _load_key_dict(settings) is None
    with pytest.raises(ValueError, match="could not be loaded"):
        create_firestore_client(settings)
