"""
models/report.py
----------------
Typed projections returned by the aggregate queries.
Each record holds exactly the columns its query selects.
"""

from dataclasses import dataclass

from models.user import User


@dataclass(frozen=True)
class CompanyAverage:
    """Mean payment amount across all users of a company."""
    company_name: str
    average_amount: float


@dataclass(frozen=True)
class PayerAverage:
    """A user together with the mean of their own payments."""
    user: User
    average_amount: float


@dataclass(frozen=True)
class LastNamePaymentRange:
    """Largest and smallest payment received by users sharing a last name."""
    lastname: str
    max_amount: int
    min_amount: int


@dataclass(frozen=True)
class CompanyUserCount:
    """Number of users employed by a company."""
    user_count: int
    company_name: str


@dataclass(frozen=True)
class CompanyPaymentSum:
    """Total of all payments received by a company's users."""
    company_name: str
    total_amount: int
