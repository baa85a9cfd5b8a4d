"""Value objects describing the outcome of a pay-on-download transition."""

from dataclasses import dataclass
from enum import Enum

from .certificate import Certificate


class PaymentStatus(str, Enum):
    """Result of settling a certificate."""

    ALREADY_PAID = "already_paid"
    PAID_NOW = "paid_now"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class PaymentOutcome:
    """What happened when a certificate was settled.

    ``charged`` is the amount debited by this call (0 unless PAID_NOW).
    ``balance`` is the owner's balance after the call, ``required`` the
    cost the certificate was settled (or refused) against.
    """

    status: PaymentStatus
    certificate: Certificate | None = None
    charged: int = 0
    balance: int | None = None
    required: int | None = None
    duplicate_ids: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status in (PaymentStatus.ALREADY_PAID, PaymentStatus.PAID_NOW)
