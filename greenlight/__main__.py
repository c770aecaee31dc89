"""Command-line entry point. Allows ``python -m greenlight``."""

import argparse
import sys

from greenlight.settings import get_masked_settings, settings
from greenlight.utils.logger import get_logger

logger = get_logger("greenlight.cli")


def run_api(host: str | None, port: int | None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    logger.debug("configuration: %s", get_masked_settings())
    uvicorn.run(
        "greenlight.api.main:create_app",
        factory=True,
        host=host or settings.api.host,
        port=port or settings.api.port,
        reload=settings.api.reload,
    )


def run_init_database(drop: bool) -> None:
    """Create the movies table (optionally dropping it first)."""
    from greenlight.database.connection import DatabaseConnection

    database = DatabaseConnection.from_settings(settings.database)
    try:
        database.create_schema(drop=drop)
    finally:
        database.dispose()
    logger.info("database schema %s", "recreated" if drop else "created")


def run_check_database() -> bool:
    """Check that the configured database answers."""
    from greenlight.database.connection import DatabaseConnection

    database = DatabaseConnection.from_settings(settings.database)
    try:
        connected = database.check_connection()
    finally:
        database.dispose()

    if connected:
        logger.info("database connection established")
    else:
        logger.error("database connection failed")
    return connected


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="greenlight",
        description="Greenlight - movie catalogue JSON API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m greenlight api --port 4000     # Serve the API
  python -m greenlight init-db             # Create tables
  python -m greenlight init-db --drop      # Drop and recreate tables
  python -m greenlight check-db            # Check database connectivity
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    api_parser = subparsers.add_parser("api", help="Serve the API")
    api_parser.add_argument("--host", help="Bind address")
    api_parser.add_argument("--port", type=int, help="API server port")

    init_parser = subparsers.add_parser("init-db", help="Create database schema")
    init_parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating",
    )

    subparsers.add_parser("check-db", help="Check database connectivity")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI main."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "api":
            run_api(args.host, args.port)
        elif args.command == "init-db":
            run_init_database(args.drop)
        elif args.command == "check-db":
            return 0 if run_check_database() else 1
    except KeyboardInterrupt:
        logger.warning("interrupted")
        return 130
    except Exception:
        logger.exception("command %s failed", args.command)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
