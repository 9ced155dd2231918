"""FastAPI application for the public ordering API and admin endpoints."""

import logging

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from restaurant_ordering_service.auth.api_dependencies import get_admin_claims_from_header
from restaurant_ordering_service.auth.token_service import TokenClaims, TokenService
from restaurant_ordering_service.exceptions import OrderingServiceError
from restaurant_ordering_service.models.admin_models import LoginRequest, TokenResponse
from restaurant_ordering_service.models.menu_models import MenuItem, MenuItemCreate, MenuItemUpdate
from restaurant_ordering_service.models.order_models import (
    CheckoutLinkRequest,
    CheckoutLinkResponse,
    Order,
    OrderPage,
    PlaceOrderRequest,
    StatusUpdateRequest,
)
from restaurant_ordering_service.services.auth_service import AuthService
from restaurant_ordering_service.services.checkout_service import CheckoutService
from restaurant_ordering_service.services.menu_service import MenuService
from restaurant_ordering_service.services.order_service import DEFAULT_PAGE_SIZE, OrderService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


def _format_validation_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten FastAPI validation errors into ``{field, message}`` pairs."""
    errors = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix from the location
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors.append(
            {"field": ".".join(location) or "body", "message": error.get("msg", "Invalid value")}
        )
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Map business errors to status codes with a JSON ``{message}`` body."""

    @app.exception_handler(OrderingServiceError)
    async def handle_service_error(request: Request, exc: OrderingServiceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}"
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "errors": _format_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(
    menu_service: MenuService,
    order_service: OrderService,
    checkout_service: CheckoutService,
    auth_service: AuthService,
    token_service: TokenService,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_service: Service for the menu catalog
        order_service: Service for order placement, status and listing
        checkout_service: Service for hosted checkout links
        auth_service: Service for admin login
        token_service: Validator for admin bearer tokens

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Ordering API",
        description="Menu catalog, customer ordering and admin order management",
        version="1.0.0",
    )

    # Store services in app state for access in route handlers
    app.state.menu_service = menu_service
    app.state.order_service = order_service
    app.state.checkout_service = checkout_service
    app.state.auth_service = auth_service
    app.state.token_service = token_service

    register_exception_handlers(app)

    def require_admin(authorization: str | None = Header(None)) -> TokenClaims:
        """Dependency to validate the admin bearer token."""
        return get_admin_claims_from_header(
            authorization=authorization, token_service=app.state.token_service
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/menu", response_model=list[MenuItem], tags=["Menu"])
    async def list_menu_items() -> list[MenuItem]:
        """List every menu item."""
        items: list[MenuItem] = await app.state.menu_service.list_items()
        return items

    @app.get("/menu/{item_id}", response_model=MenuItem, tags=["Menu"])
    async def get_menu_item(item_id: str) -> MenuItem:
        """Get a single menu item."""
        item: MenuItem = await app.state.menu_service.get_item(item_id)
        return item

    @app.post("/menu", response_model=MenuItem, status_code=201, tags=["Menu"])
    async def create_menu_item(
        request: MenuItemCreate,
        _claims: TokenClaims = Depends(require_admin),
    ) -> MenuItem:
        """Create a menu item (admin only)."""
        item: MenuItem = await app.state.menu_service.create_item(request)
        return item

    @app.put("/menu/{item_id}", response_model=MenuItem, tags=["Menu"])
    async def update_menu_item(
        item_id: str,
        request: MenuItemUpdate,
        _claims: TokenClaims = Depends(require_admin),
    ) -> MenuItem:
        """Partially update a menu item (admin only).

        Fields missing from the body are left unchanged.
        """
        item: MenuItem = await app.state.menu_service.update_item(item_id, request)
        return item

    @app.delete("/menu/{item_id}", response_model=MessageResponse, tags=["Menu"])
    async def delete_menu_item(
        item_id: str,
        _claims: TokenClaims = Depends(require_admin),
    ) -> MessageResponse:
        """Delete a menu item (admin only)."""
        await app.state.menu_service.delete_item(item_id)
        return MessageResponse(message="Menu item deleted successfully")

    @app.post("/orders", response_model=Order, status_code=201, tags=["Orders"])
    async def place_order(request: PlaceOrderRequest) -> Order:
        """Place an order. Public, no authentication."""
        order: Order = await app.state.order_service.place_order(request)
        return order

    @app.post(
        "/orders/create-checkout-link",
        response_model=CheckoutLinkResponse,
        tags=["Orders"],
    )
    async def create_checkout_link(request: CheckoutLinkRequest) -> CheckoutLinkResponse:
        """Create a hosted payment checkout link and a pending order."""
        response: CheckoutLinkResponse = await app.state.checkout_service.create_checkout_link(
            request
        )
        return response

    @app.get("/orders", response_model=OrderPage, tags=["Orders"])
    async def list_orders(
        status: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        _claims: TokenClaims = Depends(require_admin),
    ) -> OrderPage:
        """List orders, newest first, with optional status filter (admin only)."""
        orders: OrderPage = await app.state.order_service.list_orders(
            status=status, page=page, limit=limit
        )
        return orders

    @app.get("/orders/{order_id}", response_model=Order, tags=["Orders"])
    async def get_order(
        order_id: str,
        _claims: TokenClaims = Depends(require_admin),
    ) -> Order:
        """Get a single order (admin only)."""
        order: Order = await app.state.order_service.get_order(order_id)
        return order

    @app.patch("/orders/{order_id}/status", response_model=Order, tags=["Orders"])
    async def update_order_status(
        order_id: str,
        request: StatusUpdateRequest,
        claims: TokenClaims = Depends(require_admin),
    ) -> Order:
        """Set an order's status (admin only)."""
        logger.info(f"Admin {claims.identity} setting order {order_id} to {request.status.value}")
        order: Order = await app.state.order_service.set_status(order_id, request.status)
        return order

    @app.post("/admin/login", response_model=TokenResponse, tags=["Admin"])
    async def admin_login(request: LoginRequest) -> TokenResponse:
        """Exchange admin credentials for a bearer token."""
        token: str = await app.state.auth_service.login(request.email, request.password)
        return TokenResponse(token=token)

    return app
