"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so connections can be borrowed from any thread.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN, DB_STATEMENT_TIMEOUT_MS
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None


def init_pool(
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
    dsn: str = DATABASE_URL,
) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: libpq connection string or URL.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    options = {}
    if DB_STATEMENT_TIMEOUT_MS > 0:
        options["options"] = f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}"
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn, **options)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
        psycopg2.pool.PoolError: If every connection is already borrowed.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn, close: bool = False) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
        close: Discard the connection instead of keeping it for reuse.
    """
    if _pool is not None:
        _pool.putconn(conn, close=close)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
