"""
STATS API - server entry point

Usage:
    stats-api                       # Serve on SERVER_HOST:SERVER_PORT
    stats-api --port 9000 --reload  # Development server
    stats-api --init-db             # Create tables and exit
"""

import argparse
import asyncio

import uvicorn

from stats_api.core.config import settings


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the server command"""
    parser = argparse.ArgumentParser(
        prog="stats-api",
        description="STATS personal metrics API server",
    )
    parser.add_argument("--host", default=settings.SERVER_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.SERVER_PORT, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    parser.add_argument("--init-db", action="store_true", help="Create database tables and exit")
    return parser


async def _init_db() -> None:
    from stats_api.core.database import init_db, close_db
    import stats_api.models  # noqa: F401

    await init_db()
    await close_db()


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)

    if args.init_db:
        asyncio.run(_init_db())
        print("Database tables created")
        return 0

    uvicorn.run(
        "stats_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
