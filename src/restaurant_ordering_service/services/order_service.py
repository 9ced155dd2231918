"""Order placement, status and listing service."""

import logging
import math
from decimal import Decimal

from restaurant_ordering_service.exceptions import (
    NotFoundError,
    OrderingServiceError,
    StoreError,
    ValidationError,
)
from restaurant_ordering_service.models.order_models import (
    Order,
    OrderLineItem,
    OrderPage,
    OrderStatusEnum,
    PlaceOrderRequest,
)
from restaurant_ordering_service.observability import traced
from restaurant_ordering_service.observability.metrics import (
    record_order_placed,
    record_order_rejected,
    record_status_change,
)
from restaurant_ordering_service.repositories.order_repository import OrderRepository
from restaurant_ordering_service.services.menu_service import MenuService

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

STATUS_ERROR_MESSAGE = "Status must be either Pending, Completed, or Cancelled"


def parse_status(value: OrderStatusEnum | str) -> OrderStatusEnum:
    """Convert a raw status value to the enumeration.

    Raises:
        ValidationError: If the value is not one of the three statuses
    """
    try:
        return OrderStatusEnum(value)
    except ValueError as e:
        raise ValidationError(
            "Invalid order status",
            errors=[{"field": "status", "message": STATUS_ERROR_MESSAGE}],
        ) from e


class OrderService:
    """Service for placing orders and managing their lifecycle.

    Orders are all-or-nothing: every requested item is resolved and priced
    before anything is written, so a rejected request never leaves a
    partial order behind.

    Status changes are permissive. Any of Pending, Completed and Cancelled
    may be set from any current status.
    """

    def __init__(self, menu_service: MenuService, order_repository: OrderRepository) -> None:
        """Initialize the OrderService.

        Args:
            menu_service: Menu catalog used to resolve and price items
            order_repository: Repository for storing orders
        """
        self.menu_service = menu_service
        self.order_repository = order_repository

    @traced("order.place")
    async def place_order(self, request: PlaceOrderRequest) -> Order:
        """Validate, price and persist a new order.

        Args:
            request: Validated order request

        Returns:
            Order: The persisted order with captured unit prices

        Raises:
            ItemUnavailableError: If any item is missing or unavailable
            StoreError: If the order could not be saved
        """
        line_items: list[OrderLineItem] = []
        total_price = Decimal("0")

        try:
            for requested in request.items:
                menu_item = await self.menu_service.get_available_item(requested.item_id)

                line_total = menu_item.price * requested.quantity
                total_price += line_total

                line_items.append(
                    OrderLineItem(
                        item_id=menu_item.id,
                        quantity=requested.quantity,
                        customizations=requested.customizations,
                        unit_price=menu_item.price,
                        line_total=line_total,
                    )
                )
        except OrderingServiceError as e:
            record_order_rejected(type(e).__name__)
            logger.warning(f"Order for {request.name} rejected: {e.message}")
            raise

        order = Order(
            name=request.name,
            email=request.email,
            items=line_items,
            total_price=total_price,
        )

        if not self.order_repository.save_order(order):
            raise StoreError()

        record_order_placed("order")
        logger.info(f"Placed order {order.id} with {len(line_items)} line items, total {total_price}")
        return order

    async def get_order(self, order_id: str) -> Order:
        """Get an order by ID.

        Raises:
            NotFoundError: If no order has this ID
        """
        order = self.order_repository.get_order(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    @traced("order.set_status")
    async def set_status(self, order_id: str, status: OrderStatusEnum | str) -> Order:
        """Overwrite the status of an order.

        Args:
            order_id: Order to update
            status: New status, one of Pending, Completed or Cancelled

        Returns:
            Order: The updated order

        Raises:
            ValidationError: If the status is not one of the enumerated values
            NotFoundError: If no order has this ID
            StoreError: If the update could not be saved
        """
        new_status = parse_status(status)
        order = await self.get_order(order_id)

        if not self.order_repository.update_status(order_id, new_status):
            raise StoreError()

        record_status_change(new_status.value)
        logger.info(f"Order {order_id} status {order.status.value} -> {new_status.value}")
        return order.model_copy(update={"status": new_status})

    async def list_orders(
        self,
        status: OrderStatusEnum | str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPage:
        """List orders newest first, one page at a time.

        Args:
            status: Optional status filter
            page: 1-based page number
            limit: Page size (1 to 100)

        Returns:
            OrderPage: Requested page plus totals

        Raises:
            ValidationError: On an unknown status or out-of-range paging
        """
        errors = []
        if page < 1:
            errors.append({"field": "page", "message": "Page must be at least 1"})
        if limit < 1 or limit > MAX_PAGE_SIZE:
            errors.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_PAGE_SIZE}"})
        if errors:
            raise ValidationError("Invalid pagination parameters", errors=errors)

        status_filter = parse_status(status) if status else None
        orders = self.order_repository.list_orders(status=status_filter)

        start = (page - 1) * limit
        return OrderPage(
            orders=orders[start : start + limit],
            current_page=page,
            total_pages=math.ceil(len(orders) / limit),
            total_orders=len(orders),
        )
