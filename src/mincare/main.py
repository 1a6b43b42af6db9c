"""``mincare`` command line: run the API or maintain the local database.

Usage::

    mincare serve --port 8080
    mincare init-db
    mincare seed
    mincare score <user_id>
"""

from __future__ import annotations

import argparse
import asyncio
import json

import structlog
import uvicorn

from mincare.config import Settings, get_settings
from mincare.logger import setup_logging
from mincare.storage.database import dispose_engine, init_db
from mincare.storage.seed import seed_catalog

logger = structlog.get_logger(__name__)


async def _prepare_database(seed: bool) -> dict[str, int]:
    try:
        await init_db()
        return await seed_catalog() if seed else {}
    finally:
        await dispose_engine()


async def _score(user_id: str) -> dict:
    from mincare.signals.wellness import balance_report
    from mincare.tracking.service import TrackingService

    try:
        await init_db()
        snapshot = await TrackingService().refresh_wellness(user_id)
    finally:
        await dispose_engine()
    return {
        **snapshot.model_dump(mode="json"),
        "balance_report": balance_report(snapshot.score),
    }


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> None:
    uvicorn.run(
        "mincare.api.server:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )


def _cmd_init_db(args: argparse.Namespace, settings: Settings) -> None:
    asyncio.run(_prepare_database(seed=False))
    logger.info("cli.db_ready", database_url=settings.database_url)


def _cmd_seed(args: argparse.Namespace, settings: Settings) -> None:
    added = asyncio.run(_prepare_database(seed=True))
    logger.info("cli.catalog_seeded", **added)


def _cmd_score(args: argparse.Namespace, settings: Settings) -> None:
    print(json.dumps(asyncio.run(_score(args.user_id)), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mincare",
        description="MinCare wellness tracker: API server and maintenance commands.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=None, help="Bind address (default: settings).")
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes.")
    serve.set_defaults(handler=_cmd_serve)

    sub.add_parser("init-db", help="Create the database tables.").set_defaults(
        handler=_cmd_init_db
    )
    sub.add_parser("seed", help="Create tables and add the built-in catalogs.").set_defaults(
        handler=_cmd_seed
    )

    score = sub.add_parser("score", help="Recompute and print a user's wellness score.")
    score.add_argument("user_id")
    score.set_defaults(handler=_cmd_score)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)
    args.handler(args, settings)


if __name__ == "__main__":
    main()
