"""Database initialization script using SQLAlchemy create_all().

This script creates all database tables defined in SQLAlchemy models.
Schema migrations are out of scope; tables are created when missing.
"""

import asyncio
import sys
from typing import NoReturn

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core import Base, DatabaseManager

# Register ORM models on Base.metadata
from app.features.players import orm_models  # noqa: F401

logger = structlog.get_logger(__name__)


async def init_db() -> None:
    """Initialize database by creating all tables defined in models.

    Raises:
        SQLAlchemyError: If database connection or table creation fails
    """
    manager = DatabaseManager()
    try:
        logger.info("Creating database tables...")
        await manager.create_tables()
        logger.info(
            "Database initialization completed successfully",
            tables_created=len(Base.metadata.tables),
            table_names=list(Base.metadata.tables.keys()),
        )
    except SQLAlchemyError as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await manager.close()


async def drop_all_tables() -> None:
    """Drop all tables from the database.

    WARNING: This is destructive and will delete all data!
    Only use for testing or development reset.
    """
    manager = DatabaseManager()
    try:
        logger.warning("Dropping all database tables...")
        await manager.drop_tables()
        logger.info("All database tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(
            "Failed to drop database tables",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await manager.close()


async def reset_db() -> None:
    """Reset database by dropping and recreating all tables."""
    logger.warning("Resetting database (drop + create)...")
    await drop_all_tables()
    await init_db()
    logger.info("Database reset completed successfully")


def main() -> NoReturn:
    """Run CLI for database initialization commands.

    Usage:
        python -m app.init_db [init|drop|reset]
    """
    command = sys.argv[1] if len(sys.argv) > 1 else "init"

    if command == "init":
        asyncio.run(init_db())
    elif command == "drop":
        asyncio.run(drop_all_tables())
    elif command == "reset":
        asyncio.run(reset_db())
    else:
        logger.error("Unknown command", command=command)
        print("Usage: python -m app.init_db [init|drop|reset]")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
