"""
models/company_filter.py
------------------------
Optional-field filter used by the birthday report.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompanyFilter:
    """
    Filter on a user's company.

    Fields left as None (or blank) are not turned into predicates,
    so an empty filter matches every user.

    Attributes:
        name: Exact company name to match.
    """
    name: Optional[str] = None
