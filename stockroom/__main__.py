"""Stockroom command line.

Usage:
    python -m stockroom                      # serve the API
    python -m stockroom serve
    python -m stockroom reconcile            # report audit gaps only
    python -m stockroom reconcile --apply    # backfill missing audit records
"""

import argparse
import asyncio
import sys

import uvicorn

from stockroom.api.dependencies import (
    close_dependencies,
    get_audit_log,
    get_product_store,
    use_settings,
)
from stockroom.config import get_settings
from stockroom.config.settings import Settings
from stockroom.jobs.reconciliation import (
    AuditReconciliationWorkflow,
    ReconcileInput,
    ReconcileOutput,
)
from stockroom.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def serve(settings: Settings) -> int:
    uvicorn.run(
        "stockroom.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        log_level=settings.observability.logging.level.lower(),
    )
    return 0


async def reconcile(settings: Settings, apply: bool) -> ReconcileOutput:
    """Run the audit reconciliation job against the configured backend."""
    use_settings(settings)
    try:
        workflow = AuditReconciliationWorkflow(get_product_store(), get_audit_log())
        return await workflow.run(ReconcileInput(dry_run=not apply))
    finally:
        await close_dependencies()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stockroom", description="Stockroom catalog service")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("serve", help="Run the HTTP API (default)")

    reconcile_parser = commands.add_parser(
        "reconcile", help="Find and backfill audit records lost by failed appends"
    )
    reconcile_parser.add_argument(
        "--apply",
        action="store_true",
        help="Write the missing records instead of only reporting them",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    log = settings.observability.logging
    setup_logging(level=log.level, format=log.format, redact_secrets=log.redact_secrets)

    if args.command == "reconcile":
        output = asyncio.run(reconcile(settings, apply=args.apply))
        print(
            f"missing Added: {len(output.missing_added)}, "
            f"missing Updated: {len(output.missing_updated)}, "
            f"backfilled: {output.backfilled_count}"
            + ("" if args.apply else " (dry run)")
        )
        if not output.success:
            logger.error("reconcile_command_failed", error=output.error)
            return 1
        return 0

    return serve(settings)


if __name__ == "__main__":
    sys.exit(main())
