"""PostgreSQL connection and utilities."""

import logging
from contextlib import contextmanager

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy import create_engine

from src.config import POSTGRES_CONFIG
from src.db.postgres_bootstrap import Base
from src.models import *  # Needed for Base metadata

logger = logging.getLogger(__name__)


class PostgresConnection:
    def __init__(self, config: dict | None = None):
        self.config = config or POSTGRES_CONFIG
        self._engine = None

    @property
    def engine(self):
        if not self._engine:
            db_url = (
                f"postgresql+psycopg2://{self.config['user']}:{self.config['password']}@"
                f"{self.config['host']}:{self.config['port']}/{self.config['database']}"
            )
            self._engine = create_engine(db_url)
        return self._engine

    @contextmanager
    def get_cursor(self):
        """Get a database cursor for raw SQL queries.

        One connection per context: committed when the block exits cleanly,
        rolled back when it raises.
        """
        conn = psycopg2.connect(**self.config)
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                yield cursor
                conn.commit()
        except Exception as e:
            conn.rollback()
            raise e
        finally:
            conn.close()

    def check_connection(self) -> bool:
        """Run a trivial query to see whether the store answers."""
        try:
            with self.get_cursor() as cursor:
                cursor.execute("SELECT 1 AS ok")
                return cursor.fetchone() is not None
        except psycopg2.Error as e:
            logger.error(f"PostgreSQL connection error: {e}")
            return False

    def create_tables(self):
        """Create the products, users and reviews tables if they are missing."""
        logger.info("Creating tables...")

        try:
            Base.metadata.create_all(self.engine)
            logger.info("Tables created successfully.")
        except Exception as e:
            logger.error(f"Error creating tables: {e}")
            raise e


# Singleton instance
db = PostgresConnection()
