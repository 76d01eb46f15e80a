"""Status definitions for payments and registrations."""

from app.fsm.states import GatewayOrderStatus, PaymentStatus, RegistrationPaymentStatus

__all__ = ["GatewayOrderStatus", "PaymentStatus", "RegistrationPaymentStatus"]
