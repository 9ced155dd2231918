"""Exception taxonomy for the ordering service.

Each exception carries the HTTP status code it maps to at the request
boundary. Handlers in the API layer turn them into JSON ``{"message": ...}``
responses; validation errors also carry a list of per-field errors.
"""

from typing import Any


class OrderingServiceError(Exception):
    """Base class for all business-logic errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        """Build the JSON body returned to the caller."""
        return {"message": self.message}


class ValidationError(OrderingServiceError):
    """Malformed or out-of-range input."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_response(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class ItemUnavailableError(ValidationError):
    """An order references a menu item that is missing or unavailable."""

    def __init__(self, item_id: str) -> None:
        super().__init__(
            f"Item with ID {item_id} is not available",
            errors=[{"field": "items", "message": f"Item {item_id} is not available"}],
        )
        self.item_id = item_id


class NotFoundError(OrderingServiceError):
    """Referenced entity does not exist."""

    status_code = 404


class UnauthorizedError(OrderingServiceError):
    """Missing, malformed or expired bearer token."""

    status_code = 401


class ForbiddenError(OrderingServiceError):
    """Valid token without the admin role."""

    status_code = 403


class AuthenticationFailedError(OrderingServiceError):
    """Login failed; the message never says which credential was wrong."""

    status_code = 400

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class PaymentProviderError(OrderingServiceError):
    """The external payment provider rejected or failed the request."""

    status_code = 502


class StoreError(OrderingServiceError):
    """Persistence failure. Details are logged, never returned."""

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
