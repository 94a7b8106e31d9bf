"""Audit a tenant's collections (duplicates, missing tenantId, legacy layouts).

Usage:
    uv run python -m scripts.audit_tenant_collections <tenant_id>

Read-only. Prints the audit report.
"""

import asyncio
import sys

from pydantic import ValidationError

from tenant_schema.application.services.collection_audit import CollectionAuditor
from tenant_schema.core.config import get_settings
from tenant_schema.infrastructure.firebase.client import firestore_store
from tenant_schema.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Audit the tenant given on the command line."""
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.audit_tenant_collections <tenant_id>",
            file=sys.stderr,
        )
        sys.exit(1)
    tenant_id = sys.argv[1]

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    setup_logging()

    async with firestore_store(settings) as store:
        auditor = CollectionAuditor(store, tenant_id)
        result = await auditor.run_audit()
        print(auditor.generate_report(result))


if __name__ == "__main__":
    asyncio.run(main())
