"""Square payment adapter implementation.

This adapter creates hosted checkout pages through Square's Online Checkout
API (payment links).
"""

import logging
import time
import uuid
from typing import Any

import httpx

from restaurant_ordering_service.adapters.base_adapter import (
    CheckoutLineItem,
    CheckoutLinkResult,
    PaymentProviderAdapter,
)
from restaurant_ordering_service.observability.metrics import record_payment_provider_call

logger = logging.getLogger(__name__)

SQUARE_API_VERSION = "2024-01-18"


class SquareAdapter(PaymentProviderAdapter):
    """Adapter for the Square Online Checkout API.

    Authenticates with a personal or OAuth access token sent as a bearer
    token on every request.
    """

    def __init__(self, access_token: str, environment: str = "sandbox") -> None:
        """Initialize Square adapter.

        Args:
            access_token: Square API access token
            environment: API environment ('sandbox' or 'production')
        """
        super().__init__("square")
        self.access_token = access_token
        self.environment = environment

        if environment == "production":
            self.base_url = "https://connect.squareup.com"
        else:
            self.base_url = "https://connect.squareupsandbox.com"

    def format_payment_link_request(
        self,
        line_items: list[CheckoutLineItem],
        location_id: str,
        redirect_url: str,
    ) -> dict[str, Any]:
        """Build the CreatePaymentLink request body.

        Square requires an idempotency key on every call. A fresh key is
        generated per request, so repeated calls create separate links.

        Args:
            line_items: Provider-neutral line items
            location_id: Square location ID
            redirect_url: Post-checkout redirect URL

        Returns:
            dict: Square-formatted request body
        """
        return {
            "idempotency_key": str(uuid.uuid4()),
            "order": {
                "location_id": location_id,
                "line_items": [
                    {
                        "name": item.name,
                        "quantity": item.quantity,
                        "base_price_money": {
                            "amount": item.amount,
                            "currency": item.currency,
                        },
                    }
                    for item in line_items
                ],
            },
            "checkout_options": {"redirect_url": redirect_url},
        }

    async def create_checkout_link(
        self,
        line_items: list[CheckoutLineItem],
        location_id: str,
        redirect_url: str,
    ) -> CheckoutLinkResult:
        """Create a Square payment link.

        Args:
            line_items: Items to charge for
            location_id: Square location ID
            redirect_url: Post-checkout redirect URL

        Returns:
            CheckoutLinkResult: Link URL on success, error message otherwise
        """
        body = self.format_payment_link_request(line_items, location_id, redirect_url)
        started = time.perf_counter()

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}/v2/online-checkout/payment-links",
                    json=body,
                    headers={
                        "Authorization": f"Bearer {self.access_token}",
                        "Square-Version": SQUARE_API_VERSION,
                    },
                )
        except httpx.RequestError as e:
            logger.error(f"Square payment link request failed: {e}")
            return CheckoutLinkResult(success=False, error_message=f"Payment provider unreachable: {e}")
        finally:
            record_payment_provider_call(
                self.provider_name, "create_checkout_link", time.perf_counter() - started
            )

        if response.status_code != 200:
            detail = self._extract_error_detail(response)
            logger.error(f"Square payment link creation failed: {response.status_code} {detail}")
            return CheckoutLinkResult(
                success=False,
                error_message=f"Payment provider returned {response.status_code}: {detail}",
            )

        try:
            data = response.json()
        except ValueError:
            logger.error("Square returned a non-JSON payment link response")
            return CheckoutLinkResult(
                success=False, error_message="Payment provider returned an unreadable response"
            )

        payment_link = data.get("payment_link") if isinstance(data, dict) else None
        if not isinstance(payment_link, dict):
            payment_link = {}
        url = payment_link.get("url")
        if not url:
            logger.error("Square response did not include a payment link URL")
            return CheckoutLinkResult(
                success=False, error_message="Payment provider returned no checkout URL"
            )

        logger.info(f"Created Square payment link {payment_link.get('id')}")
        return CheckoutLinkResult(
            success=True,
            checkout_url=url,
            provider_reference=payment_link.get("id"),
        )

    @staticmethod
    def _extract_error_detail(response: httpx.Response) -> str:
        """Pull the first error detail out of a Square error response."""
        try:
            data = response.json()
        except ValueError:
            return response.text[:200]

        errors = data.get("errors") if isinstance(data, dict) else None
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            first = errors[0]
            return str(first.get("detail") or first.get("code") or "unknown error")
        return "unknown error"
