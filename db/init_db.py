"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Companies: employers, identified by a unique name
CREATE TABLE IF NOT EXISTS companies (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(128) UNIQUE NOT NULL
);

-- Users: login identity and optional employer
CREATE TABLE IF NOT EXISTS users (
    id              BIGSERIAL PRIMARY KEY,
    username        VARCHAR(128) UNIQUE NOT NULL,
    company_id      INT REFERENCES companies(id) ON DELETE SET NULL
);

-- Personal info: exactly one row per user
CREATE TABLE IF NOT EXISTS personal_info (
    user_id         BIGINT PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
    firstname       VARCHAR(128) NOT NULL,
    lastname        VARCHAR(128) NOT NULL,
    birth_date      DATE NOT NULL
);

-- Payments: amounts received by users
CREATE TABLE IF NOT EXISTS payments (
    id              BIGSERIAL PRIMARY KEY,
    receiver_id     BIGINT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    amount          INTEGER NOT NULL
);

-- Indexes for the join paths used by the reports
CREATE INDEX IF NOT EXISTS idx_users_company ON users(company_id);
CREATE INDEX IF NOT EXISTS idx_payments_receiver ON payments(receiver_id);
CREATE INDEX IF NOT EXISTS idx_personal_info_firstname ON personal_info(firstname);
"""

DROP_SQL = """
DROP TABLE IF EXISTS payments;
DROP TABLE IF EXISTS personal_info;
DROP TABLE IF EXISTS users;
DROP TABLE IF EXISTS companies;
"""


def _execute_script(sql: str, conn=None) -> None:
    """Run a DDL script on ``conn`` or on a pooled connection."""
    owned = conn is None
    if owned:
        conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if owned:
            release_connection(conn)


def create_tables(conn=None) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: Optional connection to use instead of borrowing one from the pool.
    """
    try:
        _execute_script(SCHEMA_SQL, conn)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


def drop_tables(conn=None) -> None:
    """Drop every reporting table. Data is lost."""
    try:
        _execute_script(DROP_SQL, conn)
        logger.info("Database schema dropped.")
    except Exception as e:
        logger.error(f"Failed to drop schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
