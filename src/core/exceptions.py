"""
Domain exceptions for the OrderDesk application.

Every error raised by the core carries a machine-readable code and a
details dict so the API layer can render it without guessing.
"""

from typing import Any


class OrderDeskError(Exception):
    """Base exception for all OrderDesk errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(OrderDeskError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class EmptyCartError(ValidationError):
    """An order was requested from an empty cart."""

    def __init__(self, customer_id: str):
        super().__init__(field="cart", message="Cart is empty")
        self.code = "EMPTY_CART"
        self.details["customer_id"] = customer_id


class InvalidQuantityError(ValidationError):
    """A quantity is negative or not a whole number where one is required."""

    def __init__(self, quantity: Any):
        super().__init__(
            field="quantity",
            message="Quantity must be a non-negative number",
            value=quantity,
        )
        self.code = "INVALID_QUANTITY"


# Authorization Exceptions
class AuthorizationError(OrderDeskError):
    """Caller is not allowed to perform the operation."""

    def __init__(self, message: str, code: str = "FORBIDDEN", **details: Any):
        super().__init__(message, code=code, details=details)


class NotAuthenticatedError(AuthorizationError):
    """No signed-in user could be resolved."""

    def __init__(self) -> None:
        super().__init__("Sign-in required", code="NOT_AUTHENTICATED")


class AgencyAccessDeniedError(AuthorizationError):
    """Caller acted on a resource outside their assigned agency."""

    def __init__(self, user_id: str, agency_id: str | None, target_agency_id: str | None):
        super().__init__(
            "You can only manage resources of your own agency",
            code="AGENCY_ACCESS_DENIED",
            user_id=user_id,
            agency_id=agency_id,
            target_agency_id=target_agency_id,
        )


# Lookup Exceptions
class NotFoundError(OrderDeskError):
    """Base exception for records that do not exist."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found in the store."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class OrderNotFoundError(NotFoundError):
    """Order not found in the store."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class CustomerNotFoundError(NotFoundError):
    """Customer profile not found."""

    def __init__(self, customer_id: str):
        super().__init__(
            f"Customer not found: {customer_id}",
            code="CUSTOMER_NOT_FOUND",
            details={"customer_id": customer_id},
        )


class StockNotFoundError(NotFoundError):
    """Stock row not found."""

    def __init__(self, stock_id: str):
        super().__init__(
            f"Stock not found: {stock_id}",
            code="STOCK_NOT_FOUND",
            details={"stock_id": stock_id},
        )


# Order workflow Exceptions
class InvalidStatusTransitionError(OrderDeskError):
    """Order status can only move forward one step at a time."""

    def __init__(self, order_id: str, current: str, requested: str):
        super().__init__(
            f"Order {order_id} cannot move from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"order_id": order_id, "current": current, "requested": requested},
        )


class OrderPlacementError(OrderDeskError):
    """Writing the order and its lines failed; nothing was committed."""

    def __init__(self, customer_id: str, reason: str):
        super().__init__(
            f"Order placement failed for customer {customer_id}: {reason}",
            code="ORDER_PLACEMENT_FAILED",
            details={"customer_id": customer_id, "reason": reason},
        )


# Storage Exceptions
class StorageError(OrderDeskError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class MalformedRecordError(StorageError):
    """A stored document does not decode into its record type."""

    def __init__(self, collection: str, record_id: Any, reason: str):
        super().__init__(
            f"Malformed {collection} record {record_id}: {reason}",
            code="MALFORMED_RECORD",
            details={"collection": collection, "record_id": record_id, "reason": reason},
        )


# Provisioning Exceptions
class ProvisioningError(OrderDeskError):
    """The user-provisioning endpoint failed."""

    def __init__(self, reason: str, status_code: int | None = None):
        super().__init__(
            f"User provisioning failed: {reason}",
            code="PROVISIONING_FAILED",
            details={"reason": reason, "status_code": status_code},
        )


class DuplicateUserError(ProvisioningError):
    """The e-mail address is already registered."""

    def __init__(self, email: str):
        super().__init__(reason="email already in use", status_code=409)
        self.code = "DUPLICATE_USER"
        self.details["email"] = email


class ConfigurationError(OrderDeskError):
    """Configuration error."""

    pass
