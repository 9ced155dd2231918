"""Seed the ordering tables with an admin account, sample menu and sample order.

Usage (from ``src/``):
    python -m seed admin --email admin@example.com --password adminpassword
    python -m seed menu
    python -m seed order
"""

import argparse
import asyncio
import logging
import os
import sys
from decimal import Decimal

from restaurant_ordering_service.auth.password_hasher import hash_password
from restaurant_ordering_service.bootstrap import (
    DEFAULT_ADMIN_USERS_TABLE,
    DEFAULT_MENU_TABLE,
    DEFAULT_ORDERS_TABLE,
    get_dynamodb_resource,
)
from restaurant_ordering_service.exceptions import OrderingServiceError, StoreError
from restaurant_ordering_service.models.admin_models import AdminUser
from restaurant_ordering_service.models.menu_models import MenuItemCreate
from restaurant_ordering_service.models.order_models import (
    Order,
    OrderItemRequest,
    PlaceOrderRequest,
)
from restaurant_ordering_service.observability import configure_logging
from restaurant_ordering_service.repositories.admin_repository import AdminUserRepository
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.repositories.order_repository import OrderRepository
from restaurant_ordering_service.services.menu_service import MenuService
from restaurant_ordering_service.services.order_service import OrderService

logger = logging.getLogger(__name__)

SAMPLE_MENU = [
    MenuItemCreate(
        name="Margherita Pizza",
        description="Classic cheese pizza",
        price=Decimal("10.99"),
        category="Entree",
    ),
    MenuItemCreate(
        name="Pepperoni Pizza",
        description="Pepperoni and cheese",
        price=Decimal("12.99"),
        category="Entree",
    ),
    MenuItemCreate(
        name="Caesar Salad",
        description="Romaine lettuce, croutons, Caesar dressing",
        price=Decimal("7.99"),
        category="Salad",
    ),
    MenuItemCreate(
        name="Lemonade",
        description="Fresh lemonade",
        price=Decimal("3.49"),
        category="Drink",
    ),
    MenuItemCreate(
        name="Chocolate Cake",
        description="Rich chocolate cake",
        price=Decimal("5.99"),
        category="Dessert",
    ),
]


def seed_admin(repository: AdminUserRepository, name: str, email: str, password: str) -> AdminUser:
    """Create (or replace) an admin account.

    Raises:
        StoreError: If the account could not be saved
    """
    user = AdminUser(name=name, email=email.lower(), password_hash=hash_password(password))

    if not repository.save_user(user):
        raise StoreError()

    logger.info(f"Admin user {user.email} seeded")
    return user


async def seed_menu(menu_service: MenuService) -> int:
    """Insert the sample menu. Returns the number of items created."""
    for item in SAMPLE_MENU:
        await menu_service.create_item(item)

    logger.info(f"Seeded {len(SAMPLE_MENU)} menu items")
    return len(SAMPLE_MENU)


async def seed_order(menu_service: MenuService, order_service: OrderService) -> Order | None:
    """Place a sample order for two of the first available menu item.

    Returns:
        The placed order, or None when the menu is empty
    """
    available = [item for item in await menu_service.list_items() if item.available]
    if not available:
        logger.warning("No menu items found, please seed menu items first")
        return None

    order = await order_service.place_order(
        PlaceOrderRequest(
            name="Sample Customer",
            items=[
                OrderItemRequest(
                    item_id=available[0].id, quantity=2, customizations="Extra cheese"
                )
            ],
        )
    )
    logger.info(f"Sample order {order.id} seeded")
    return order


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seed", description=__doc__.splitlines()[0])
    commands = parser.add_subparsers(dest="command", required=True)

    admin = commands.add_parser("admin", help="Create the admin account")
    admin.add_argument("--name", default="Admin User")
    admin.add_argument("--email", default="admin@example.com")
    admin.add_argument("--password", required=True)

    commands.add_parser("menu", help="Insert the sample menu")
    commands.add_parser("order", help="Place a sample order")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    dynamodb_resource = get_dynamodb_resource()
    menu_service = MenuService(
        MenuItemRepository(
            dynamodb_resource, os.getenv("DYNAMODB_MENU_TABLE", DEFAULT_MENU_TABLE)
        )
    )

    try:
        if args.command == "admin":
            repository = AdminUserRepository(
                dynamodb_resource,
                os.getenv("DYNAMODB_ADMIN_USERS_TABLE", DEFAULT_ADMIN_USERS_TABLE),
            )
            seed_admin(repository, args.name, args.email, args.password)
        elif args.command == "menu":
            asyncio.run(seed_menu(menu_service))
        else:
            order_repository = OrderRepository(
                dynamodb_resource, os.getenv("DYNAMODB_ORDERS_TABLE", DEFAULT_ORDERS_TABLE)
            )
            order = asyncio.run(seed_order(menu_service, OrderService(menu_service, order_repository)))
            if order is None:
                return 1
    except OrderingServiceError as e:
        logger.error(f"Seeding {args.command} failed: {e.message}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
