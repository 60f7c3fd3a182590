"""
services/report_service.py
---------------------------
Runs the reporting queries on pooled connections and formats a text digest.
"""

from typing import Callable, Optional, TypeVar

import psycopg2

from config import DEFAULT_BIRTHDAY_LIMIT
from db.connection import get_connection, release_connection
from models.company_filter import CompanyFilter
from models.payment import Payment
from models.report import (
    CompanyAverage,
    CompanyPaymentSum,
    CompanyUserCount,
    LastNamePaymentRange,
    PayerAverage,
)
from models.user import Birthday, User
from repositories.report_repo import ReportRepository
from utils.errors import StoreUnavailableError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ReportService:
    """
    Application-facing entry point for company and payment reports.

    Each call borrows one connection from the pool, runs a single query,
    ends the read transaction and hands the connection back, so one
    instance can be shared by any number of threads.
    """

    def __init__(self, repo: Optional[ReportRepository] = None):
        self.repo = repo or ReportRepository()

    def _run(self, query: Callable[..., T], *args) -> T:
        """
        Run ``query(conn, *args)`` on a pooled connection.

        Raises:
            StoreUnavailableError: If no connection can be borrowed.
        """
        operation = getattr(query, "__name__", repr(query))
        try:
            conn = get_connection()
        except psycopg2.Error as e:
            logger.error(f"Could not borrow a connection for {operation}: {e}")
            raise StoreUnavailableError(operation, e) from e

        broken = False
        try:
            return query(conn, *args)
        finally:
            # Reads only: rolling back just closes the implicit transaction.
            try:
                if not conn.closed:
                    conn.rollback()
            except psycopg2.Error as e:
                broken = True
                logger.warning(f"Rollback after {operation} failed, discarding connection: {e}")
            release_connection(conn, close=broken or bool(conn.closed))

    # ── QUERIES ───────────────────────────────────────────

    def list_all_users(self) -> list[User]:
        return self._run(self.repo.list_all_users)

    def list_users_by_first_name(self, first_name: str) -> list[User]:
        return self._run(self.repo.list_users_by_first_name, first_name)

    def list_users_ordered_by_birthday(self, limit: int) -> list[User]:
        return self._run(self.repo.list_users_ordered_by_birthday, limit)

    def list_users_by_company_name(self, company_name: str) -> list[User]:
        return self._run(self.repo.list_users_by_company_name, company_name)

    def list_payments_by_company_name(self, company_name: str) -> list[Payment]:
        return self._run(self.repo.list_payments_by_company_name, company_name)

    def average_payment_amount(self, first_name: str, last_name: str) -> float:
        return self._run(self.repo.average_payment_amount, first_name, last_name)

    def company_averages(self) -> list[CompanyAverage]:
        return self._run(self.repo.company_averages)

    def above_average_payers(self) -> list[PayerAverage]:
        return self._run(self.repo.above_average_payers)

    def min_max_payments_by_last_name(self) -> list[LastNamePaymentRange]:
        return self._run(self.repo.min_max_payments_by_last_name)

    def max_full_name_length(self) -> int:
        return self._run(self.repo.max_full_name_length)

    def birthdays_by_company_filter(self, company_filter: Optional[CompanyFilter] = None) -> list[Birthday]:
        return self._run(self.repo.birthdays_by_company_filter, company_filter)

    def user_count_by_company(self) -> list[CompanyUserCount]:
        return self._run(self.repo.user_count_by_company)

    def payment_sum_by_company(self) -> list[CompanyPaymentSum]:
        return self._run(self.repo.payment_sum_by_company)

    # ── DIGEST ────────────────────────────────────────────

    def build_digest(self, limit: Optional[int] = None) -> str:
        """
        Build a plain-text overview of every company and payment report.

        Args:
            limit: How many of the oldest users to list.
                Defaults to DEFAULT_BIRTHDAY_LIMIT.

        Returns:
            The digest, one section per report.
        """
        limit = DEFAULT_BIRTHDAY_LIMIT if limit is None else limit
        users = self.list_all_users()
        if not users:
            return "No users found."

        lines = [f"Users: {len(users)}"]

        lines.append(f"\nOldest {limit}:")
        for user in self.list_users_ordered_by_birthday(limit):
            lines.append(f"  {user.personal_info.birth_date}  {user.full_name}")

        counts = {c.company_name: c.user_count for c in self.user_count_by_company()}
        averages = {a.company_name: a.average_amount for a in self.company_averages()}
        sums = {s.company_name: s.total_amount for s in self.payment_sum_by_company()}

        lines.append("\nCompanies:")
        for name in sorted(set(counts) | set(sums)):
            average = f"{averages[name]:.2f}" if name in averages else "-"
            lines.append(
                f"  {name}: {counts.get(name, 0)} user(s), "
                f"avg {average}, total {sums.get(name, 0)}"
            )

        payers = self.above_average_payers()
        lines.append("\nAbove-average payers:")
        if not payers:
            lines.append("  (none)")
        for payer in payers:
            lines.append(f"  {payer.user.full_name}: {payer.average_amount:.2f}")

        lines.append("\nPayment range by last name:")
        for entry in self.min_max_payments_by_last_name():
            lines.append(f"  {entry.lastname}: {entry.min_amount} - {entry.max_amount}")

        lines.append(f"\nLongest full name: {self.max_full_name_length()} characters")

        logger.info(f"Built digest for {len(users)} users")
        return "\n".join(lines)
