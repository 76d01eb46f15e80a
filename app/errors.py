"""
Service-level error kinds.

Services raise these; the API layer turns every one of them into a
``{"success": false, "message": ..., "error": ...}`` body.
"""


class ServiceError(Exception):
    """Base class for expected, request-scoped failures."""

    status_code = 400
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message, "error": self.code}


class ValidationError(ServiceError):
    status_code = 422
    code = "validation_error"


class NotFound(ServiceError):
    status_code = 404
    code = "not_found"


class Conflict(ServiceError):
    status_code = 409
    code = "conflict"


class NotRegistered(ServiceError):
    status_code = 404
    code = "not_registered"


class InvalidCredentials(ServiceError):
    status_code = 401
    code = "invalid_credentials"


class NotVerified(ServiceError):
    status_code = 403
    code = "not_verified"


class InvalidOrExpiredToken(ServiceError):
    status_code = 400
    code = "invalid_or_expired_token"


class PaymentNotConfirmable(ServiceError):
    status_code = 409
    code = "payment_not_confirmable"


class GatewayError(ServiceError):
    status_code = 502
    code = "gateway_error"


class PersistenceError(ServiceError):
    status_code = 500
    code = "persistence_error"
