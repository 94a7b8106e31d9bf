"""Remove legacy (superseded) collections for a tenant.

Usage:
    uv run python -m scripts.run_legacy_cleanup <tenant_id> [--dry-run] [--batch-size N]
        [--verify] [--lease OWNER]

Prints the cleanup report. With --verify, also lists legacy collections that
still hold documents afterwards. With --lease, the run holds the tenant's
advisory cleanup lease so concurrent runs for the same tenant are refused.
Exits 1 when misconfigured or when the run did not succeed.
"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from tenant_schema.application.dtos.cleanup import CleanupOptions
from tenant_schema.application.services.cleanup_lease import CleanupLease
from tenant_schema.application.services.legacy_cleanup import LegacyCollectionCleanup
from tenant_schema.core.config import Settings, get_settings
from tenant_schema.domain.exceptions import CleanupLeaseHeldError
from tenant_schema.infrastructure.firebase.client import firestore_store
from tenant_schema.shared.telemetry.logging import setup_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="run_legacy_cleanup", description=__doc__.splitlines()[0])
    parser.add_argument("tenant_id")
    parser.add_argument("--dry-run", action="store_true", default=None)
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument("--verify", action="store_true")
    parser.add_argument("--lease", metavar="OWNER", default=None)
    return parser.parse_args(argv)


def _build_options(args: argparse.Namespace, settings: Settings) -> CleanupOptions:
    """Command-line flags win over settings; ValueError for an out-of-range batch size."""
    return CleanupOptions(
        tenant_id=args.tenant_id,
        batch_size=settings.cleanup_batch_size if args.batch_size is None else args.batch_size,
        dry_run=settings.cleanup_dry_run if args.dry_run is None else args.dry_run,
        preserve_legacy=settings.cleanup_preserve_legacy,
    )


async def main() -> None:
    """Run the cleanup for the tenant given on the command line."""
    args = _parse_args(sys.argv[1:])
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    setup_logging()

    try:
        options = _build_options(args, settings)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    async with firestore_store(settings) as store:
        cleanup = LegacyCollectionCleanup(store, options)
        try:
            if args.lease:
                async with CleanupLease(
                    store, options.tenant_id, args.lease, settings.cleanup_lease_ttl_seconds
                ):
                    result = await cleanup.run_cleanup()
            else:
                result = await cleanup.run_cleanup()
        except CleanupLeaseHeldError as e:
            print(e.message, file=sys.stderr)
            sys.exit(1)

        print(cleanup.generate_report(result))

        if args.verify:
            verification = await cleanup.verify_cleanup()
            if verification.remaining_collections:
                print("## Remaining Legacy Collections")
                for issue in verification.issues:
                    print(f"- {issue}")
            else:
                print("No legacy collections remain.")

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
