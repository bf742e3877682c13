"""
Base Repository - Camp Evaluation API
camp_eval/repositories/base.py

Base repository class with Snowflake connection management and common utilities.
"""

import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generator, Optional

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from camp_eval.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    ForeignKeyViolationException,
    RepositoryException,
)
from camp_eval.services.snowflake import get_snowflake_connection

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base repository with Snowflake connection management."""

    @contextmanager
    def get_connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        """Context manager for Snowflake connections."""
        conn = None
        try:
            conn = get_snowflake_connection()
            yield conn
        except InterfaceError as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")
        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Context manager for Snowflake cursors with automatic connection cleanup."""
        with self.get_connection() as conn:
            cursor = conn.cursor(DictCursor) if dict_cursor else conn.cursor()
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_query(
        self,
        sql: str,
        params: Optional[tuple] = None,
        fetch_one: bool = False,
        fetch_all: bool = False,
        commit: bool = False,
    ) -> Optional[Any]:
        """
        Execute a SQL query with error handling.

        Args:
            sql: SQL query string
            params: Query parameters
            fetch_one: Return single row
            fetch_all: Return all rows
            commit: Commit transaction after execution

        Returns:
            Query results, or the affected row count
        """
        with self.get_cursor() as cursor:
            try:
                cursor.execute(sql, params or ())

                if commit:
                    cursor.connection.commit()

                if fetch_one:
                    return cursor.fetchone()
                elif fetch_all:
                    return cursor.fetchall()

                return cursor.rowcount

            except DatabaseError as e:
                raise self.translate_error(e)

    @contextmanager
    def transaction(self) -> Generator[Any, None, None]:
        """
        Transactional scope around several statements on one connection.

        Usage:
            with self.transaction() as cursor:
                cursor.execute(...)
                cursor.execute(...)
                # Commits once on success
                # Rolls back on exception
        """
        with self.get_cursor() as cursor:
            try:
                cursor.execute("BEGIN")
                yield cursor
                cursor.connection.commit()
            except DatabaseError as e:
                cursor.connection.rollback()
                raise self.translate_error(e)
            except Exception:
                cursor.connection.rollback()
                raise

    def translate_error(self, e: DatabaseError) -> RepositoryException:
        """Map a Snowflake error onto the repository exception hierarchy."""
        if isinstance(e, ProgrammingError):
            error_msg = str(e).upper()
            if "UNIQUE" in error_msg or "DUPLICATE" in error_msg:
                return DuplicateEntityException(str(e))
            elif "FOREIGN KEY" in error_msg:
                return ForeignKeyViolationException(str(e))
            logger.error("Query error: %s", e)
            return RepositoryException(f"Query error: {e}")
        logger.error("Database error: %s", e)
        return RepositoryException(f"Database error: {e}")

    def normalize_timestamp(self, dt: Optional[datetime]) -> Optional[datetime]:
        """Ensure timestamp is UTC-aware."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def parse_variant(self, value: Any, default: Any = None) -> Any:
        """VARIANT columns come back as JSON text."""
        if value is None:
            return default
        if isinstance(value, (dict, list)):
            return value
        return json.loads(value)
