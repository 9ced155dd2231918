"""Fixtures wiring the real services and app over in-memory tables."""

import copy
from typing import Any

import pytest
from fastapi.testclient import TestClient

from restaurant_ordering_service.adapters.base_adapter import (
    CheckoutLineItem,
    CheckoutLinkResult,
    PaymentProviderAdapter,
)
from restaurant_ordering_service.bootstrap import ServiceContainer, build_app, build_services
from restaurant_ordering_service.repositories.admin_repository import AdminUserRepository
from seed import seed_admin

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpassword"


class InMemoryTable:
    """Dict-backed stand-in for a boto3 DynamoDB Table.

    Supports the subset of the Table API the repositories use: single-key
    get/put/delete, ``SET`` update expressions and scans with an equality
    filter.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self.items: dict[str, dict[str, Any]] = {}

    def get_item(self, Key: dict[str, Any]) -> dict[str, Any]:
        item = self.items.get(Key[self.key])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def put_item(self, Item: dict[str, Any]) -> dict[str, Any]:
        self.items[Item[self.key]] = copy.deepcopy(Item)
        return {}

    def delete_item(self, Key: dict[str, Any]) -> dict[str, Any]:
        self.items.pop(Key[self.key], None)
        return {}

    def update_item(
        self,
        Key: dict[str, Any],
        UpdateExpression: str,
        ExpressionAttributeNames: dict[str, str],
        ExpressionAttributeValues: dict[str, Any],
    ) -> dict[str, Any]:
        item = self.items[Key[self.key]]
        for assignment in UpdateExpression.removeprefix("SET ").split(","):
            name, value = (part.strip() for part in assignment.split("="))
            item[ExpressionAttributeNames[name]] = ExpressionAttributeValues[value]
        return {}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        items = list(self.items.values())
        if "FilterExpression" in kwargs:
            name, value = (part.strip() for part in kwargs["FilterExpression"].split("="))
            attribute = kwargs["ExpressionAttributeNames"][name]
            expected = kwargs["ExpressionAttributeValues"][value]
            items = [item for item in items if item.get(attribute) == expected]
        return {"Items": copy.deepcopy(items)}


class InMemoryDynamoDB:
    """Stand-in for a boto3 DynamoDB service resource."""

    def __init__(self) -> None:
        self.tables: dict[str, InMemoryTable] = {}

    def Table(self, name: str) -> InMemoryTable:
        if name not in self.tables:
            self.tables[name] = InMemoryTable("email" if "admin" in name else "id")
        return self.tables[name]


class RecordingPaymentAdapter(PaymentProviderAdapter):
    """Payment adapter that returns a fixed link and records requests."""

    def __init__(self) -> None:
        super().__init__("test")
        self.requests: list[list[CheckoutLineItem]] = []

    async def create_checkout_link(
        self,
        line_items: list[CheckoutLineItem],
        location_id: str,
        redirect_url: str,
    ) -> CheckoutLinkResult:
        self.requests.append(line_items)
        return CheckoutLinkResult(
            success=True,
            checkout_url=f"https://pay.example.com/link/{len(self.requests)}",
            provider_reference=f"link_{len(self.requests)}",
        )


@pytest.fixture
def dynamodb() -> InMemoryDynamoDB:
    """Empty in-memory DynamoDB."""
    return InMemoryDynamoDB()


@pytest.fixture
def services(dynamodb: InMemoryDynamoDB, monkeypatch: pytest.MonkeyPatch) -> ServiceContainer:
    """Real services wired over the in-memory tables with a seeded admin."""
    monkeypatch.setenv("JWT_SECRET", "component-test-secret")
    monkeypatch.setenv("ENABLE_SQUARE_CHECKOUT", "false")

    container = build_services(dynamodb)
    seed_admin(
        AdminUserRepository(dynamodb, "restaurant-admin-users"),
        "Admin User",
        ADMIN_EMAIL,
        ADMIN_PASSWORD,
    )
    return container


@pytest.fixture
def payment_adapter(services: ServiceContainer) -> RecordingPaymentAdapter:
    """Install a recording payment adapter on the checkout service."""
    adapter = RecordingPaymentAdapter()
    services.checkout_service.payment_adapter = adapter
    services.checkout_service.location_id = "LOC_1"
    return adapter


@pytest.fixture
def client(services: ServiceContainer) -> TestClient:
    """Test client over the fully wired app."""
    return TestClient(build_app(services))


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    """Authorization header obtained through the login endpoint."""
    response = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
