"""Checkout link service for hosted payment pages."""

import logging
from decimal import ROUND_HALF_UP, Decimal

from restaurant_ordering_service.adapters.base_adapter import (
    CheckoutLineItem,
    PaymentProviderAdapter,
)
from restaurant_ordering_service.exceptions import PaymentProviderError, StoreError
from restaurant_ordering_service.models.order_models import (
    CheckoutLinkRequest,
    CheckoutLinkResponse,
    Order,
    OrderLineItem,
)
from restaurant_ordering_service.observability import traced
from restaurant_ordering_service.observability.metrics import (
    record_checkout_link_created,
    record_order_placed,
)
from restaurant_ordering_service.repositories.order_repository import OrderRepository
from restaurant_ordering_service.services.menu_service import MenuService

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_MAJOR = 100


def to_minor_units(price: Decimal) -> int:
    """Convert a major-unit price to integer minor units, rounding half up."""
    return int((price * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_major_units(amount: int) -> Decimal:
    """Convert integer minor units back to a two-place decimal price."""
    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


class CheckoutService:
    """Service for creating hosted checkout links.

    Resolves the requested items against the menu, asks the payment provider
    for a checkout link and records a pending, unpaid order. Calls are not
    idempotent: a repeated request creates another link and another order.
    """

    def __init__(
        self,
        menu_service: MenuService,
        order_repository: OrderRepository,
        payment_adapter: PaymentProviderAdapter | None,
        location_id: str,
        redirect_url: str,
        currency: str = "USD",
    ) -> None:
        """Initialize the CheckoutService.

        Args:
            menu_service: Menu catalog used to resolve and price items
            order_repository: Repository for storing orders
            payment_adapter: Payment provider, None when checkout is disabled
            location_id: Provider location to charge against
            redirect_url: Where customers land after paying
            currency: ISO 4217 currency code for line item amounts
        """
        self.menu_service = menu_service
        self.order_repository = order_repository
        self.payment_adapter = payment_adapter
        self.location_id = location_id
        self.redirect_url = redirect_url
        self.currency = currency

    @traced("checkout.create_link")
    async def create_checkout_link(self, request: CheckoutLinkRequest) -> CheckoutLinkResponse:
        """Create a hosted checkout link and record the pending order.

        Args:
            request: Validated checkout request

        Returns:
            CheckoutLinkResponse: Checkout URL and order total

        Raises:
            ItemUnavailableError: If any item is missing or unavailable
            PaymentProviderError: If no provider is configured or the provider call fails
            StoreError: If the order could not be saved
        """
        if self.payment_adapter is None:
            raise PaymentProviderError("Payment provider not configured")

        checkout_items: list[CheckoutLineItem] = []
        line_items: list[OrderLineItem] = []
        total_minor = 0

        for requested in request.items:
            menu_item = await self.menu_service.get_available_item(requested.item_id)
            amount = to_minor_units(menu_item.price)
            total_minor += amount * requested.quantity

            checkout_items.append(
                CheckoutLineItem(
                    name=menu_item.name,
                    quantity=str(requested.quantity),
                    amount=amount,
                    currency=self.currency,
                )
            )
            unit_price = to_major_units(amount)
            line_items.append(
                OrderLineItem(
                    item_id=menu_item.id,
                    quantity=requested.quantity,
                    unit_price=unit_price,
                    line_total=unit_price * requested.quantity,
                )
            )

        result = await self.payment_adapter.create_checkout_link(
            checkout_items, self.location_id, self.redirect_url
        )
        if not result.success or not result.checkout_url:
            raise PaymentProviderError(result.error_message or "Failed to create checkout link")

        record_checkout_link_created(self.payment_adapter.provider_name)

        total_price = to_major_units(total_minor)
        order = Order(
            name=request.name,
            email=request.email,
            items=line_items,
            total_price=total_price,
            checkout_url=result.checkout_url,
        )

        if not self.order_repository.save_order(order):
            logger.error(
                f"Checkout link {result.provider_reference} was created but order could not be saved"
            )
            raise StoreError()

        record_order_placed("checkout")
        logger.info(f"Created checkout order {order.id}, total {total_price}")
        return CheckoutLinkResponse(checkout_url=result.checkout_url, total_price=total_price)
