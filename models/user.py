"""
models/user.py
--------------
Domain models for users, their personal info and their employer.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Company:
    """
    An employer of users.

    Attributes:
        id: Database primary key.
        name: Unique company name (e.g., 'Apple').
    """
    id: int
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class PersonalInfo:
    """
    Personal details stored one-to-one with a user.

    Attributes:
        firstname: Given name.
        lastname: Family name.
        birth_date: Calendar date of birth (no time component).
    """
    firstname: str
    lastname: str
    birth_date: date


@dataclass
class User:
    """
    A user as returned by the reporting queries.

    Attributes:
        id: Database primary key.
        username: Unique login name.
        personal_info: The user's PersonalInfo.
        company: Employer, or None for users without a company.
    """
    id: int
    username: str
    personal_info: PersonalInfo
    company: Optional[Company] = None

    @property
    def full_name(self) -> str:
        """First and last name separated by a single space."""
        return f"{self.personal_info.firstname} {self.personal_info.lastname}"

    def __str__(self) -> str:
        employer = self.company.name if self.company else "-"
        return f"{self.full_name} ({self.username}) | {employer} | {self.personal_info.birth_date}"


@dataclass(frozen=True)
class Birthday:
    """Projection wrapping a single date of birth."""
    birth_date: date

