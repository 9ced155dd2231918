"""Menu data models.

These models represent menu items as stored in DynamoDB and the request
bodies accepted by the admin menu endpoints.
"""

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, model_validator

OBJECT_ID_PATTERN = r"^[0-9a-f]{24}$"


def new_object_id() -> str:
    """Generate a 24-character lowercase hex identifier."""
    return uuid.uuid4().hex[:24]


class MenuItem(BaseModel):
    """Menu item model."""

    id: str = Field(default_factory=new_object_id, description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name", min_length=1)
    description: str | None = Field(None, description="Item description")
    price: Decimal = Field(..., description="Item price", gt=0)
    category: str = Field(..., description="Menu category (e.g. 'Entree')", min_length=1)
    available: bool = Field(default=True, description="Whether item is currently available")
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
            "price": self.price,
            "category": self.category,
            "available": self.available,
            "created_at": self.created_at.isoformat(),
        }

        if self.description is not None:
            item["description"] = self.description

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=item["id"],
            name=item["name"],
            description=item.get("description"),
            price=Decimal(str(item["price"])),
            category=item["category"],
            available=bool(item.get("available", True)),
            created_at=datetime.fromisoformat(item["created_at"]),
        )


class MenuItemCreate(BaseModel):
    """Request body for creating a menu item."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Item name")
    description: str | None = Field(None, description="Item description")
    price: Decimal = Field(..., gt=0, description="Item price, must be positive")
    category: str = Field(..., min_length=1, description="Menu category")
    available: StrictBool = Field(default=True, description="Whether item is available")


class MenuItemUpdate(BaseModel):
    """Request body for a partial menu item update.

    Only fields present in the request are applied. Required attributes of
    a menu item cannot be set to null.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    price: Decimal | None = Field(None, gt=0)
    category: str | None = Field(None, min_length=1)
    available: StrictBool | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "MenuItemUpdate":
        """Reject explicit nulls for fields a menu item must always have."""
        for field in ("name", "price", "category", "available"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields supplied by the caller."""
        return self.model_dump(exclude_unset=True)
