"""Dependency wiring shared by the ASGI entry point and the Lambda handler.

All configuration comes from environment variables. Each factory builds one
layer and receives the layer below it explicitly, so nothing in the core
holds a global connection.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any

import boto3
from fastapi import FastAPI

from restaurant_ordering_service.adapters.base_adapter import PaymentProviderAdapter
from restaurant_ordering_service.adapters.square_adapter import SquareAdapter
from restaurant_ordering_service.auth.token_service import DEFAULT_TOKEN_TTL_SECONDS, TokenService
from restaurant_ordering_service.handlers.api_handler import create_app
from restaurant_ordering_service.repositories.admin_repository import AdminUserRepository
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.repositories.order_repository import OrderRepository
from restaurant_ordering_service.services.auth_service import AuthService
from restaurant_ordering_service.services.checkout_service import CheckoutService
from restaurant_ordering_service.services.menu_service import MenuService
from restaurant_ordering_service.services.order_service import OrderService

logger = logging.getLogger(__name__)

DEFAULT_MENU_TABLE = "restaurant-menu-items"
DEFAULT_ORDERS_TABLE = "restaurant-orders"
DEFAULT_ADMIN_USERS_TABLE = "restaurant-admin-users"


@dataclass
class ServiceContainer:
    """Fully wired services for one process."""

    menu_service: MenuService
    order_service: OrderService
    checkout_service: CheckoutService
    auth_service: AuthService
    token_service: TokenService


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "dummy"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "dummy"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    # boto3 falls back to the default credential chain (IAM role, env vars, etc.)
    return boto3.resource("dynamodb", region_name=region)


def create_payment_adapter() -> PaymentProviderAdapter | None:
    """Create the payment provider adapter from environment variables.

    Returns:
        Configured adapter, or None when checkout links are disabled or
        credentials are missing
    """
    if os.getenv("ENABLE_SQUARE_CHECKOUT", "true").lower() != "true":
        logger.info("Square checkout disabled")
        return None

    access_token = os.getenv("SQUARE_ACCESS_TOKEN")
    if not access_token or not os.getenv("SQUARE_LOCATION_ID"):
        logger.warning("Square checkout enabled but credentials not configured, skipping")
        return None

    adapter = SquareAdapter(
        access_token=access_token,
        environment=os.getenv("SQUARE_ENVIRONMENT", "sandbox"),
    )
    logger.info(f"Square adapter configured ({adapter.environment})")
    return adapter


def create_token_service() -> TokenService:
    """Create the token service.

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET must be set in environment")

    ttl = int(os.getenv("JWT_EXPIRY_SECONDS", str(DEFAULT_TOKEN_TTL_SECONDS)))
    return TokenService(secret=secret, ttl_seconds=ttl)


def build_services(dynamodb_resource: Any) -> ServiceContainer:
    """Create repositories and services on top of a DynamoDB resource.

    Args:
        dynamodb_resource: Boto3 DynamoDB resource

    Returns:
        ServiceContainer with every service wired
    """
    menu_table = os.getenv("DYNAMODB_MENU_TABLE", DEFAULT_MENU_TABLE)
    orders_table = os.getenv("DYNAMODB_ORDERS_TABLE", DEFAULT_ORDERS_TABLE)
    admins_table = os.getenv("DYNAMODB_ADMIN_USERS_TABLE", DEFAULT_ADMIN_USERS_TABLE)

    menu_repository = MenuItemRepository(dynamodb_resource=dynamodb_resource, table_name=menu_table)
    order_repository = OrderRepository(dynamodb_resource=dynamodb_resource, table_name=orders_table)
    admin_repository = AdminUserRepository(
        dynamodb_resource=dynamodb_resource, table_name=admins_table
    )

    logger.info(
        f"Repositories configured - menu: {menu_table}, orders: {orders_table}, admins: {admins_table}"
    )

    token_service = create_token_service()
    menu_service = MenuService(menu_repository=menu_repository)

    checkout_service = CheckoutService(
        menu_service=menu_service,
        order_repository=order_repository,
        payment_adapter=create_payment_adapter(),
        location_id=os.getenv("SQUARE_LOCATION_ID", ""),
        redirect_url=os.getenv("PAYMENT_REDIRECT_URL", ""),
        currency=os.getenv("PAYMENT_CURRENCY", "USD"),
    )

    return ServiceContainer(
        menu_service=menu_service,
        order_service=OrderService(menu_service=menu_service, order_repository=order_repository),
        checkout_service=checkout_service,
        auth_service=AuthService(admin_repository=admin_repository, token_service=token_service),
        token_service=token_service,
    )


def build_app(services: ServiceContainer) -> FastAPI:
    """Create the FastAPI application from wired services."""
    return create_app(
        menu_service=services.menu_service,
        order_service=services.order_service,
        checkout_service=services.checkout_service,
        auth_service=services.auth_service,
        token_service=services.token_service,
    )
