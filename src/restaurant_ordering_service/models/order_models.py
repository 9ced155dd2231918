"""Order data models.

These models represent orders, their line items and status, plus the
request and response bodies of the order endpoints. Orders are stored in
DynamoDB with ``id`` as partition key.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictInt

from restaurant_ordering_service.models.menu_models import OBJECT_ID_PATTERN, new_object_id

CUSTOMER_NAME_MAX_LENGTH = 100


class OrderStatusEnum(str, Enum):
    """Enumeration of order status values."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class OrderLineItem(BaseModel):
    """A line item of a persisted order.

    ``unit_price`` is captured from the menu when the order is created so
    later menu price changes never alter the order.
    """

    item_id: str = Field(..., description="Menu item identifier")
    quantity: int = Field(..., ge=1, description="Number of units ordered")
    customizations: str | None = Field(None, description="Free-text customization")
    unit_price: Decimal = Field(..., description="Menu price at order time")
    line_total: Decimal = Field(..., description="unit_price x quantity")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to a DynamoDB map."""
        item: dict[str, Any] = {
            "item_id": self.item_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "line_total": self.line_total,
        }

        if self.customizations is not None:
            item["customizations"] = self.customizations

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "OrderLineItem":
        """Create OrderLineItem from a DynamoDB map."""
        return cls(
            item_id=item["item_id"],
            quantity=int(item["quantity"]),
            customizations=item.get("customizations"),
            unit_price=Decimal(str(item["unit_price"])),
            line_total=Decimal(str(item["line_total"])),
        )


class Order(BaseModel):
    """Customer order."""

    id: str = Field(default_factory=new_object_id, description="Unique order identifier")
    name: str = Field(..., description="Customer name")
    email: str | None = Field(None, description="Customer email")
    items: list[OrderLineItem] = Field(..., description="Ordered line items")
    total_price: Decimal = Field(..., description="Sum of line totals")
    status: OrderStatusEnum = Field(default=OrderStatusEnum.PENDING, description="Order status")
    payment_status: bool = Field(default=False, description="Whether the order has been paid")
    checkout_url: str | None = Field(None, description="Hosted checkout link, if any")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Creation timestamp"
    )

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "items": [line.to_dynamodb_item() for line in self.items],
            "total_price": self.total_price,
            "status": self.status.value,
            "payment_status": self.payment_status,
            "created_at": self.created_at.isoformat(),
        }

        if self.email is not None:
            item["email"] = self.email

        if self.checkout_url is not None:
            item["checkout_url"] = self.checkout_url

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Order":
        """Create Order from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Order: Parsed model instance
        """
        return cls(
            id=item["id"],
            name=item["name"],
            email=item.get("email"),
            items=[OrderLineItem.from_dynamodb_item(line) for line in item.get("items", [])],
            total_price=Decimal(str(item["total_price"])),
            status=OrderStatusEnum(item["status"]),
            payment_status=bool(item.get("payment_status", False)),
            checkout_url=item.get("checkout_url"),
            created_at=datetime.fromisoformat(item["created_at"]),
        )


class OrderItemRequest(BaseModel):
    """A requested line item."""

    item_id: str = Field(..., pattern=OBJECT_ID_PATTERN, description="Menu item identifier")
    quantity: StrictInt = Field(..., ge=1, description="Quantity, at least 1")
    customizations: str | None = None


class PlaceOrderRequest(BaseModel):
    """Request body for placing an order."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=CUSTOMER_NAME_MAX_LENGTH)
    email: EmailStr | None = None
    items: list[OrderItemRequest] = Field(..., min_length=1)


class CheckoutItemRequest(BaseModel):
    """A requested checkout line item."""

    item_id: str = Field(..., pattern=OBJECT_ID_PATTERN)
    quantity: StrictInt = Field(..., ge=1)


class CheckoutLinkRequest(BaseModel):
    """Request body for creating a hosted checkout link."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=CUSTOMER_NAME_MAX_LENGTH)
    email: EmailStr
    items: list[CheckoutItemRequest] = Field(..., min_length=1)


class CheckoutLinkResponse(BaseModel):
    """Response model for checkout link creation."""

    checkout_url: str = Field(..., serialization_alias="checkoutUrl")
    total_price: Decimal = Field(..., serialization_alias="totalPrice")


class StatusUpdateRequest(BaseModel):
    """Request body for an order status change."""

    status: OrderStatusEnum


class OrderPage(BaseModel):
    """One page of orders for the admin listing."""

    orders: list[Order]
    current_page: int = Field(..., serialization_alias="currentPage")
    total_pages: int = Field(..., serialization_alias="totalPages")
    total_orders: int = Field(..., serialization_alias="totalOrders")
