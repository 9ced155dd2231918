"""Shared dependency factory for the Lambda handler.

Dependencies are created once and reused across invocations within the same
Lambda container to keep warm starts cheap.
"""

import logging
import os
from typing import Any

from fastapi import FastAPI

from restaurant_ordering_service.bootstrap import (
    ServiceContainer,
    build_app,
    build_services,
    get_dynamodb_resource as create_dynamodb_resource,
)
from restaurant_ordering_service.observability import configure_logging, setup_observability

logger = logging.getLogger(__name__)

# Module-level caches for Lambda container reuse
_dynamodb_resource: Any | None = None
_services: ServiceContainer | None = None
_fastapi_app: FastAPI | None = None


def get_dynamodb_resource() -> Any:
    """Create or retrieve cached DynamoDB resource."""
    global _dynamodb_resource

    if _dynamodb_resource is None:
        _dynamodb_resource = create_dynamodb_resource()

    return _dynamodb_resource


def get_services() -> ServiceContainer:
    """Create or retrieve cached services."""
    global _services

    if _services is None:
        _services = build_services(get_dynamodb_resource())
        logger.info("Services initialized")

    return _services


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application."""
    global _fastapi_app

    if _fastapi_app is None:
        _fastapi_app = build_app(get_services())
        setup_observability(_fastapi_app)
        logger.info("FastAPI application initialized")

    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Initialize Lambda environment with logging.

    Should be called once during Lambda cold start.
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Lambda environment initialized")
