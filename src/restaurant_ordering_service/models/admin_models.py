"""Admin user and login models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field

from restaurant_ordering_service.models.menu_models import new_object_id

ADMIN_ROLE = "admin"


class AdminUser(BaseModel):
    """Administrator account.

    Stored in DynamoDB with ``email`` as partition key. The password is only
    ever stored as a salted hash.
    """

    id: str = Field(default_factory=new_object_id)
    name: str
    email: str
    password_hash: str
    role: str = ADMIN_ROLE
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format."""
        return {
            "email": self.email,
            "id": self.id,
            "name": self.name,
            "password_hash": self.password_hash,
            "role": self.role,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "AdminUser":
        """Create AdminUser from DynamoDB item."""
        return cls(
            id=item["id"],
            name=item["name"],
            email=item["email"],
            password_hash=item["password_hash"],
            role=item.get("role", ADMIN_ROLE),
            created_at=datetime.fromisoformat(item["created_at"]),
        )


class LoginRequest(BaseModel):
    """Admin login request body."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Admin login response."""

    token: str
