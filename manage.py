#!/usr/bin/env python3
"""
Obra inventory analytics management CLI.

Usage:
    python manage.py serve       Start the API server
    python manage.py kpis        Print the dashboard KPIs of the configured data source
    python manage.py export      Write the inventory listing as CSV
    python manage.py pending     List pending transfer batches
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from src.application.services import create_dashboard_session
from src.application.session import DashboardSession
from src.application.use_cases import (
    DashboardOverviewUseCase,
    ExportInventoryUseCase,
    InventoryQuery,
    ListPendingBatchesUseCase,
)
from src.config import configure_logging, get_settings
from src.core.entities.inventory import InventoryStatus
from src.core.exceptions import ObraError


async def _with_session(args: argparse.Namespace, action) -> None:
    session = create_dashboard_session()
    try:
        if args.user:
            await session.login(args.user, args.password)
        await action(session)
    finally:
        await session.close()


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn on the FastAPI app."""
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_kpis(args: argparse.Namespace) -> None:
    """Print the KPI report (and optionally the full dashboard) as JSON."""

    async def action(session: DashboardSession) -> None:
        overview = await DashboardOverviewUseCase(session).execute()
        payload = overview if args.full else overview.kpis
        print(payload.model_dump_json(by_alias=True, indent=2))

    asyncio.run(_with_session(args, action))


def cmd_export(args: argparse.Namespace) -> None:
    """Write the filtered inventory listing to a CSV file."""

    async def action(session: DashboardSession) -> None:
        query = InventoryQuery(status=InventoryStatus(args.status), site_id=args.site)
        export = await ExportInventoryUseCase(session).execute(query)
        target = Path(args.output or export.filename)
        target.write_text(export.content, encoding="utf-8")
        print(f"Wrote {target}")

    asyncio.run(_with_session(args, action))


def cmd_pending(args: argparse.Namespace) -> None:
    """List pending transfer batches."""

    async def action(session: DashboardSession) -> None:
        pending = await ListPendingBatchesUseCase(session).execute()
        if not pending.batches:
            print("No pending batches.")
            return
        for batch in pending.batches:
            print(
                f"{batch.id}: {batch.from_name} -> {batch.to_name}, "
                f"{len(batch.items)} items, ${batch.total_value:,.0f}"
            )
        print(json.dumps({"total": pending.total, "totalValue": pending.total_value}))

    asyncio.run(_with_session(args, action))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Obra inventory analytics management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)
    settings = get_settings()

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=settings.api.host, help="Bind host")
    p_serve.add_argument("--port", type=int, default=settings.api.port, help="Bind port")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # Shared login options for data commands
    auth = argparse.ArgumentParser(add_help=False)
    auth.add_argument("--user", help="Log in as this user before reading data")
    auth.add_argument("--password", default="", help="Password for --user")

    # kpis
    p_kpis = sub.add_parser("kpis", parents=[auth], help="Print dashboard KPIs")
    p_kpis.add_argument("--full", action="store_true", help="Print the whole dashboard")
    p_kpis.set_defaults(func=cmd_kpis)

    # export
    p_export = sub.add_parser("export", parents=[auth], help="Export inventory as CSV")
    p_export.add_argument(
        "--status",
        default=InventoryStatus.ALL.value,
        choices=[s.value for s in InventoryStatus],
        help="Status filter (default: ALL)",
    )
    p_export.add_argument("--site", help="Only this site id")
    p_export.add_argument("--output", "-o", help="Output path (default: inventory_<date>.csv)")
    p_export.set_defaults(func=cmd_export)

    # pending
    p_pending = sub.add_parser("pending", parents=[auth], help="List pending transfer batches")
    p_pending.set_defaults(func=cmd_pending)

    args = parser.parse_args()
    configure_logging()
    try:
        args.func(args)
    except ObraError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
