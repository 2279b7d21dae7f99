"""
Infrastructure Setup Script for the Catalog Backend
This script checks the database connection and creates the tables.
"""

import logging
import sys

from src.db.postgres_client import db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def check_database_connection() -> bool:
    """Check that PostgreSQL answers."""
    logger.info("Checking database connection...")

    if db.check_connection():
        logger.info("✅ PostgreSQL connection: OK")
        return True

    logger.error("❌ PostgreSQL connection: Failed")
    return False


def check_data_availability() -> None:
    """Report how many rows each table holds."""
    with db.get_cursor() as cursor:
        for table in ("products", "users", "reviews"):
            cursor.execute(f"SELECT COUNT(*) AS count FROM {table}")
            logger.info(f"📦 Rows in {table}: {cursor.fetchone()['count']}")


def main() -> bool:
    """Main setup function."""
    logger.info("🚀 Setting up Catalog Backend...")

    if not check_database_connection():
        logger.error("❌ Database connection check failed!")
        return False

    db.create_tables()
    check_data_availability()

    logger.info("✅ Setup complete! Ready to start the server.")
    return True


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
