"""Base adapter for payment provider integrations.

This module defines the capability interface every payment provider adapter
implements. The ordering core only ever sees provider-neutral line items and
a result object; provider-specific request and response shapes stay inside
the concrete adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutLineItem:
    """Provider-neutral checkout line item.

    Attributes:
        name: Menu item name shown on the hosted checkout page
        quantity: Quantity as text, as payment providers expect it
        amount: Unit price in integer minor units (e.g. cents)
        currency: ISO 4217 currency code
    """

    name: str
    quantity: str
    amount: int
    currency: str


@dataclass
class CheckoutLinkResult:
    """Result of a checkout link request.

    Attributes:
        success: Whether the provider created the link
        checkout_url: Hosted checkout URL on success
        provider_reference: Provider-side identifier of the link, if any
        error_message: Error description if the request failed
    """

    success: bool
    checkout_url: str | None = None
    provider_reference: str | None = None
    error_message: str | None = None


class PaymentProviderAdapter(ABC):
    """Abstract base class for payment provider adapters.

    The adapter follows a simple error handling pattern:
    - create_checkout_link returns a failed CheckoutLinkResult on expected
      failures (API errors, network issues)
    - The checkout service decides how to surface the failure; no retries
    """

    def __init__(self, provider_name: str) -> None:
        """Initialize the payment provider adapter.

        Args:
            provider_name: Name of the payment provider (e.g., 'square')
        """
        self.provider_name = provider_name

    @abstractmethod
    async def create_checkout_link(
        self,
        line_items: list[CheckoutLineItem],
        location_id: str,
        redirect_url: str,
    ) -> CheckoutLinkResult:
        """Ask the provider for a hosted checkout link.

        Args:
            line_items: Items to charge for
            location_id: Provider location (merchant site) to charge against
            redirect_url: Where the customer lands after paying

        Returns:
            CheckoutLinkResult: Outcome of the request
        """
        pass
