"""Domain errors raised by the invoicing services.

Each error carries the HTTP status it maps to; ``backend.app.main`` installs
the handlers that turn them into JSON responses.
"""

from typing import Any, Optional


class InvoicingError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, errors: Optional[list[dict[str, Any]]] = None):
        self.detail = detail or self.default_detail
        self.errors = errors or []
        super().__init__(self.detail)


class ValidationError(InvoicingError):
    """Malformed or out-of-range input."""

    status_code = 400
    default_detail = "Invalid input"


class InvalidStatusError(ValidationError):
    default_detail = "Invalid status"


class AuthorizationError(InvoicingError):
    """The principal does not own the referenced resource."""

    status_code = 403
    default_detail = "Forbidden"


class NotFoundError(InvoicingError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(InvoicingError):
    """Invoice number collision that survived every regeneration attempt."""

    status_code = 409
    default_detail = "Conflict"


class PaymentGatewayError(InvoicingError):
    status_code = 500
    default_detail = "Failed to create payment intent"
