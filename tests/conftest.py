"""
Shared fixtures for the report tests.

``fake_connection`` builds a MagicMock that behaves like a psycopg2
connection: ``conn.cursor()`` is a context manager whose cursor returns
the canned rows from ``fetchall()`` and records every ``execute`` call.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def fake_connection():
    """Factory: fake_connection(rows) -> (conn, cursor)."""

    def _make(rows=None):
        cursor = MagicMock(name="cursor")
        cursor.fetchall.return_value = rows if rows is not None else []
        conn = MagicMock(name="connection")
        conn.closed = 0
        conn.cursor.return_value.__enter__.return_value = cursor
        return conn, cursor

    return _make


def executed_sql(cursor) -> str:
    """SQL text of the last execute call, whitespace-normalized."""
    sql = cursor.execute.call_args.args[0]
    return " ".join(sql.split())


def executed_params(cursor):
    """Parameters of the last execute call."""
    return cursor.execute.call_args.args[1]


def user_row(user_id=1, username="BillGates", firstname="Bill", lastname="Gates",
             birth_date=date(1955, 10, 28), company_id=1, company_name="Microsoft"):
    """A row shaped like the user column list selected by the repository."""
    return (user_id, username, firstname, lastname, birth_date, company_id, company_name)
