"""Shared pytest fixtures and configuration for all tests."""

import os

# Must be set before main/lambda_handler are imported so they skip app creation
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import UTC, datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from restaurant_ordering_service.models.menu_models import MenuItem  # noqa: E402


@pytest.fixture
def pizza_id() -> str:
    """Fixture providing a well-formed menu item ID."""
    return "a1b2c3d4e5f6a7b8c9d0e1f2"


@pytest.fixture
def salad_id() -> str:
    """Fixture providing a second well-formed menu item ID."""
    return "0123456789abcdef01234567"


@pytest.fixture
def pizza(pizza_id: str) -> MenuItem:
    """Fixture providing an available menu item."""
    return MenuItem(
        id=pizza_id,
        name="Margherita Pizza",
        description="Classic cheese pizza",
        price=Decimal("10.99"),
        category="Entree",
        available=True,
        created_at=datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
    )


@pytest.fixture
def salad(salad_id: str) -> MenuItem:
    """Fixture providing a second available menu item."""
    return MenuItem(
        id=salad_id,
        name="Caesar Salad",
        description="Romaine lettuce, croutons, Caesar dressing",
        price=Decimal("7.99"),
        category="Salad",
        available=True,
        created_at=datetime(2024, 1, 15, 10, 31, tzinfo=UTC),
    )


@pytest.fixture
def mock_menu_item_record(pizza_id: str) -> dict:
    """Fixture providing a menu item as DynamoDB returns it."""
    return {
        "id": pizza_id,
        "name": "Margherita Pizza",
        "description": "Classic cheese pizza",
        "price": Decimal("10.99"),
        "category": "Entree",
        "available": True,
        "created_at": "2024-01-15T10:30:00+00:00",
    }


@pytest.fixture
def mock_order_record(pizza_id: str) -> dict:
    """Fixture providing an order as DynamoDB returns it."""
    return {
        "id": "ffeeddccbbaa998877665544",
        "name": "Alice",
        "items": [
            {
                "item_id": pizza_id,
                "quantity": Decimal("2"),
                "customizations": "Extra cheese",
                "unit_price": Decimal("10.99"),
                "line_total": Decimal("21.98"),
            }
        ],
        "total_price": Decimal("21.98"),
        "status": "Pending",
        "payment_status": False,
        "created_at": "2024-01-15T11:00:00+00:00",
    }
