"""
models/payment.py
-----------------
Domain model for a payment received by a user.
"""

from dataclasses import dataclass

from models.user import User


@dataclass
class Payment:
    """
    A single payment.

    Attributes:
        id: Database primary key.
        receiver: The User who received the payment.
        amount: Whole units, currency-agnostic.
    """
    id: int
    receiver: User
    amount: int

    def __str__(self) -> str:
        return f"#{self.id} {self.receiver.username}: {self.amount}"
