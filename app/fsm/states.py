"""
Payment and registration status definitions.
Payments only move forward: pending -> completed | failed, plus
failed -> completed when the gateway reports the order paid.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """Lifecycle of a single gateway order."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentStatus.COMPLETED, PaymentStatus.FAILED)

    def can_transition_to(self, new_status: "PaymentStatus", gateway_paid: bool = False) -> bool:
        """
        Same-status updates are allowed (no-op); terminal statuses are final.

        The one exception: a payment failed locally (e.g. expired by
        reconciliation) is completed when the gateway reports the order paid.
        """
        if new_status == self:
            return True
        if gateway_paid and self == PaymentStatus.FAILED and new_status == PaymentStatus.COMPLETED:
            return True
        return self == PaymentStatus.PENDING


class RegistrationPaymentStatus(str, Enum):
    """
    Payment status as seen from an event registration.
    FREE iff the declared amount is zero; it never changes.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FREE = "free"
    FAILED = "failed"

    @classmethod
    def for_amount(cls, amount) -> "RegistrationPaymentStatus":
        return cls.FREE if amount == 0 else cls.PENDING

    @classmethod
    def from_payment(cls, status: PaymentStatus) -> "RegistrationPaymentStatus":
        return cls(status.value)


class GatewayOrderStatus(str, Enum):
    """Razorpay order states."""

    CREATED = "created"
    ATTEMPTED = "attempted"
    PAID = "paid"
