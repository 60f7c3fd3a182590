"""
db/seed.py
----------
Loads the sample dataset used by the demo and the integration tests:
three companies, five users and fourteen payments.
Run this module directly to seed a fresh database:
    python -m db.seed
"""

from datetime import date

from utils.logger import get_logger

logger = get_logger(__name__)

COMPANIES = ("Microsoft", "Apple", "Google")

# (firstname, lastname, birth_date, company, payment amounts)
USERS = (
    ("Bill", "Gates", date(1955, 10, 28), "Microsoft", (100, 300, 500)),
    ("Steve", "Jobs", date(1955, 2, 24), "Apple", (250, 600, 500)),
    ("Sergey", "Brin", date(1973, 8, 21), "Google", (500, 500, 500)),
    ("Tim", "Cook", date(1960, 11, 1), "Apple", (400, 300)),
    ("Diane", "Greene", date(1955, 1, 15), "Google", (300, 300, 300)),
)


def load_sample_data(conn) -> None:
    """
    Insert the sample companies, users, personal info and payments.

    Rows are inserted in declaration order, so user ids follow USERS.
    The caller's transaction is committed on success and rolled back on error.

    Args:
        conn: An open psycopg2 connection with the schema already created.
    """
    try:
        with conn.cursor() as cur:
            company_ids = {}
            for name in COMPANIES:
                cur.execute("INSERT INTO companies (name) VALUES (%s) RETURNING id;", (name,))
                company_ids[name] = cur.fetchone()[0]

            for firstname, lastname, birth_date, company, amounts in USERS:
                cur.execute(
                    "INSERT INTO users (username, company_id) VALUES (%s, %s) RETURNING id;",
                    (firstname + lastname, company_ids[company]),
                )
                user_id = cur.fetchone()[0]
                cur.execute(
                    """
                    INSERT INTO personal_info (user_id, firstname, lastname, birth_date)
                    VALUES (%s, %s, %s, %s);
                    """,
                    (user_id, firstname, lastname, birth_date),
                )
                cur.executemany(
                    "INSERT INTO payments (receiver_id, amount) VALUES (%s, %s);",
                    [(user_id, amount) for amount in amounts],
                )
        conn.commit()
        logger.info(f"Loaded {len(COMPANIES)} companies and {len(USERS)} users.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to load sample data: {e}")
        raise


if __name__ == "__main__":
    from db.connection import get_connection, init_pool, release_connection
    from db.init_db import create_tables

    init_pool()
    create_tables()
    connection = get_connection()
    try:
        load_sample_data(connection)
    finally:
        release_connection(connection)
    print("Sample data loaded successfully.")
