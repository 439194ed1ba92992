"""Rejection outcomes of the purchase authorizer.

The ledger returns these values instead of raising them; the HTTP layer
translates each code into a status code.
"""

from dataclasses import dataclass
from enum import Enum


class RejectionCode(Enum):
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    TICKET_TYPE_NOT_FOUND = "TICKET_TYPE_NOT_FOUND"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"


@dataclass(frozen=True)
class PurchaseRejection:
    """A terminal, user-facing reason a purchase was not authorized."""

    code: RejectionCode
    message: str
    available: int | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @classmethod
    def session_not_found(cls) -> "PurchaseRejection":
        return cls(code=RejectionCode.SESSION_NOT_FOUND, message="Session not found")

    @classmethod
    def ticket_type_not_found(cls) -> "PurchaseRejection":
        return cls(code=RejectionCode.TICKET_TYPE_NOT_FOUND, message="Ticket type not found")

    @classmethod
    def insufficient_capacity(cls, available: int) -> "PurchaseRejection":
        return cls(
            code=RejectionCode.INSUFFICIENT_CAPACITY,
            message=f"Not enough available seats. Only {available} left.",
            available=available,
        )
