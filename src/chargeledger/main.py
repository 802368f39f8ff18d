"""Command line entry point for chargeledger database housekeeping."""

import argparse
import asyncio
import logging
import sys

from chargeledger.config import DatabaseConfig
from chargeledger.database import Database
from chargeledger.logging_utils import log_error, setup_logging

TABLES = ["chargebox", "connector", "connector_status", "connector_metervalue", "transaction", "reservation"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="chargeledger - OCPP telemetry persistence (SQLite)"
    )
    parser.add_argument(
        "--db",
        default=None,
        help="Path to SQLite database file (default: $CHARGELEDGER_DB or chargeledger.db)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("init-db", help="Create the schema if the database has none")
    subparsers.add_parser("check", help="Print row counts of the persistence tables")
    return parser


async def init_db(db: Database) -> None:
    await db.initialize_schema()


async def check(db: Database) -> dict[str, int]:
    conn = await db.connect()
    counts = {}
    for table in TABLES:
        cursor = await conn.execute(f'SELECT COUNT(*) FROM "{table}"')
        row = await cursor.fetchone()
        counts[table] = row[0]
    return counts


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    config = DatabaseConfig.from_env(path=args.db)
    db = Database(config)

    logger.info(
        "Running command",
        extra={
            "event_type": "system_command",
            "event_data": {"command": args.command, "database": config.path},
        },
    )

    try:
        if args.command == "init-db":
            await init_db(db)
        elif args.command == "check":
            for table, count in (await check(db)).items():
                print(f"{table}: {count}")
    except Exception as e:
        log_error(logger, "command_error", f"Command {args.command} failed: {e}", exc_info=e)
        return 1
    finally:
        await db.disconnect()
    return 0


def run():
    """Entry point for console script."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
