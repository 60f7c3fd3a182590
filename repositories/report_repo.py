"""
repositories/report_repo.py
---------------------------
Read-only reporting queries over users, personal info, companies and payments.

Every method takes the connection to run on as its first argument and
returns fully materialized domain objects. The repository never commits,
rolls back or closes that connection; its owner does.
"""

from typing import Any, Optional, Sequence

import psycopg2

from models.company_filter import CompanyFilter
from models.payment import Payment
from models.report import (
    CompanyAverage,
    CompanyPaymentSum,
    CompanyUserCount,
    LastNamePaymentRange,
    PayerAverage,
)
from models.user import Birthday, Company, PersonalInfo, User
from repositories.predicate import PredicateBuilder
from utils.errors import InvalidArgumentError, NoDataError, StoreUnavailableError
from utils.logger import get_logger

logger = get_logger(__name__)

# Columns consumed by _row_to_user, in order.
_USER_COLUMNS = "u.id, u.username, pi.firstname, pi.lastname, pi.birth_date, c.id, c.name"
_USER_WIDTH = 7

_USER_FROM = """
    FROM users u
    JOIN personal_info pi ON pi.user_id = u.id
    LEFT JOIN companies c ON c.id = u.company_id
"""


class ReportRepository:
    """Stateless set of reporting queries; safe to share between threads."""

    # ── USERS ─────────────────────────────────────────────

    def list_all_users(self, conn) -> list[User]:
        """Return every user."""
        sql = f"SELECT {_USER_COLUMNS} {_USER_FROM} ORDER BY u.id;"
        rows = self._fetch_all(conn, "list_all_users", sql)
        return [self._row_to_user(r) for r in rows]

    def list_users_by_first_name(self, conn, first_name: str) -> list[User]:
        """
        Return users whose first name equals ``first_name`` exactly.

        The comparison is case-sensitive.
        """
        sql = f"SELECT {_USER_COLUMNS} {_USER_FROM} WHERE pi.firstname = %s ORDER BY u.id;"
        rows = self._fetch_all(conn, "list_users_by_first_name", sql, (first_name,))
        return [self._row_to_user(r) for r in rows]

    def list_users_ordered_by_birthday(self, conn, limit: int) -> list[User]:
        """
        Return the ``limit`` oldest users, oldest first.

        Users born on the same day come back in id order.

        Args:
            conn: Open database connection.
            limit: Maximum number of users, must be a positive integer.

        Raises:
            InvalidArgumentError: If ``limit`` is not a positive integer.
        """
        operation = "list_users_ordered_by_birthday"
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise InvalidArgumentError(f"limit must be a positive integer, got {limit!r}", operation)
        sql = f"SELECT {_USER_COLUMNS} {_USER_FROM} ORDER BY pi.birth_date ASC, u.id ASC LIMIT %s;"
        rows = self._fetch_all(conn, operation, sql, (limit,))
        return [self._row_to_user(r) for r in rows]

    def list_users_by_company_name(self, conn, company_name: str) -> list[User]:
        """Return users employed by the company named ``company_name``."""
        sql = f"SELECT {_USER_COLUMNS} {_USER_FROM} WHERE c.name = %s ORDER BY u.id;"
        rows = self._fetch_all(conn, "list_users_by_company_name", sql, (company_name,))
        return [self._row_to_user(r) for r in rows]

    # ── PAYMENTS ──────────────────────────────────────────

    def list_payments_by_company_name(self, conn, company_name: str) -> list[Payment]:
        """
        Return payments received by employees of ``company_name``.

        Ordered by receiver username, then by amount, both ascending.
        """
        sql = f"""
            SELECT p.id, p.amount, {_USER_COLUMNS}
            FROM payments p
            JOIN users u ON u.id = p.receiver_id
            JOIN personal_info pi ON pi.user_id = u.id
            JOIN companies c ON c.id = u.company_id
            WHERE c.name = %s
            ORDER BY u.username ASC, p.amount ASC, p.id ASC;
        """
        rows = self._fetch_all(conn, "list_payments_by_company_name", sql, (company_name,))
        return [Payment(id=r[0], amount=r[1], receiver=self._row_to_user(r, 2)) for r in rows]

    def average_payment_amount(self, conn, first_name: str, last_name: str) -> float:
        """
        Mean payment amount of the user(s) with the given first and last name.

        Raises:
            NoDataError: If no payment matches both names.
        """
        operation = "average_payment_amount"
        sql = """
            SELECT COUNT(p.id), AVG(p.amount)
            FROM payments p
            JOIN personal_info pi ON pi.user_id = p.receiver_id
            WHERE pi.firstname = %s AND pi.lastname = %s;
        """
        count, average = self._fetch_one(conn, operation, sql, (first_name, last_name))
        if not count:
            raise NoDataError(f"no payments for {first_name} {last_name}", operation)
        return float(average)

    # ── AGGREGATES ────────────────────────────────────────

    def company_averages(self, conn) -> list[CompanyAverage]:
        """
        Mean payment amount per company, ordered by company name.

        Companies whose users received no payments are left out (inner joins).
        """
        sql = """
            SELECT c.name, AVG(p.amount)
            FROM companies c
            JOIN users u ON u.company_id = c.id
            JOIN payments p ON p.receiver_id = u.id
            GROUP BY c.name
            ORDER BY c.name ASC;
        """
        rows = self._fetch_all(conn, "company_averages", sql)
        return [CompanyAverage(company_name=r[0], average_amount=float(r[1])) for r in rows]

    def above_average_payers(self, conn) -> list[PayerAverage]:
        """
        Users whose own mean payment beats the mean of all payments.

        The comparison is strict; results are ordered by username.
        """
        sql = f"""
            SELECT {_USER_COLUMNS}, AVG(p.amount)
            {_USER_FROM}
            JOIN payments p ON p.receiver_id = u.id
            GROUP BY u.id, pi.user_id, c.id
            HAVING AVG(p.amount) > (SELECT AVG(amount) FROM payments)
            ORDER BY u.username ASC;
        """
        rows = self._fetch_all(conn, "above_average_payers", sql)
        return [
            PayerAverage(user=self._row_to_user(r), average_amount=float(r[_USER_WIDTH]))
            for r in rows
        ]

    def min_max_payments_by_last_name(self, conn) -> list[LastNamePaymentRange]:
        """Largest and smallest payment per last name, ordered by last name."""
        sql = """
            SELECT pi.lastname, MAX(p.amount), MIN(p.amount)
            FROM payments p
            JOIN personal_info pi ON pi.user_id = p.receiver_id
            GROUP BY pi.lastname
            ORDER BY pi.lastname ASC;
        """
        rows = self._fetch_all(conn, "min_max_payments_by_last_name", sql)
        return [LastNamePaymentRange(lastname=r[0], max_amount=r[1], min_amount=r[2]) for r in rows]

    def max_full_name_length(self, conn) -> int:
        """
        Longest ``lastname + firstname`` (no separator) over all users.

        Returns 0 when there are no users.
        """
        sql = """
            SELECT COALESCE(MAX(LENGTH(pi.lastname || pi.firstname)), 0)
            FROM users u
            JOIN personal_info pi ON pi.user_id = u.id;
        """
        (length,) = self._fetch_one(conn, "max_full_name_length", sql)
        return int(length)

    def birthdays_by_company_filter(
        self, conn, company_filter: Optional[CompanyFilter] = None
    ) -> list[Birthday]:
        """
        Birth dates of users matching ``company_filter``, in user id order.

        An empty (or missing) filter matches every user.
        """
        company_filter = company_filter or CompanyFilter()
        where, params = (
            PredicateBuilder()
            .add(company_filter.name, "c.name")
            .build_and()
        )
        sql = f"SELECT pi.birth_date {_USER_FROM} WHERE {where} ORDER BY u.id;"
        rows = self._fetch_all(conn, "birthdays_by_company_filter", sql, params)
        return [Birthday(birth_date=r[0]) for r in rows]

    def user_count_by_company(self, conn) -> list[CompanyUserCount]:
        """Number of users per company that has any, ordered by company name."""
        sql = """
            SELECT COUNT(u.id), c.name
            FROM users u
            JOIN companies c ON c.id = u.company_id
            GROUP BY c.name
            ORDER BY c.name ASC;
        """
        rows = self._fetch_all(conn, "user_count_by_company", sql)
        return [CompanyUserCount(user_count=int(r[0]), company_name=r[1]) for r in rows]

    def payment_sum_by_company(self, conn) -> list[CompanyPaymentSum]:
        """
        Sum of payment amounts per company, ordered by company name.

        Companies whose users received no payments are left out (inner joins).
        """
        sql = """
            SELECT c.name, SUM(p.amount)
            FROM companies c
            JOIN users u ON u.company_id = c.id
            JOIN payments p ON p.receiver_id = u.id
            GROUP BY c.name
            ORDER BY c.name ASC;
        """
        rows = self._fetch_all(conn, "payment_sum_by_company", sql)
        return [CompanyPaymentSum(company_name=r[0], total_amount=int(r[1])) for r in rows]

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _fetch_all(conn, operation: str, sql: str, params: Sequence[Any] = ()) -> list[tuple]:
        """Execute ``sql`` and return every row, wrapping driver errors."""
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Query {operation} failed: {e}")
            raise StoreUnavailableError(operation, e) from e
        logger.debug(f"Query {operation} returned {len(rows)} row(s)")
        return rows

    @classmethod
    def _fetch_one(cls, conn, operation: str, sql: str, params: Sequence[Any] = ()) -> tuple:
        """Execute an aggregate query that always yields exactly one row."""
        return cls._fetch_all(conn, operation, sql, params)[0]

    @staticmethod
    def _row_to_user(row: Sequence[Any], offset: int = 0) -> User:
        """Convert the _USER_COLUMNS slice of a row starting at ``offset`` to a User."""
        (user_id, username, firstname, lastname, birth_date,
         company_id, company_name) = row[offset:offset + _USER_WIDTH]
        return User(
            id=user_id,
            username=username,
            personal_info=PersonalInfo(
                firstname=firstname,
                lastname=lastname,
                birth_date=birth_date,
            ),
            company=Company(id=company_id, name=company_name) if company_id is not None else None,
        )
