"""Custom metrics for the ordering service."""

from opentelemetry import metrics

meter = metrics.get_meter("ordering-svc")

orders_placed_counter = meter.create_counter(
    name="orders_placed_total",
    description="Total number of orders persisted, by source",
    unit="1",
)

order_placement_failure_counter = meter.create_counter(
    name="order_placement_failure_total",
    description="Total number of rejected order placements, by reason",
    unit="1",
)

order_status_change_counter = meter.create_counter(
    name="order_status_change_total",
    description="Total number of order status changes, by new status",
    unit="1",
)

checkout_links_counter = meter.create_counter(
    name="checkout_links_created_total",
    description="Total number of hosted checkout links created",
    unit="1",
)

payment_provider_response_time = meter.create_histogram(
    name="payment_provider_response_time_seconds",
    description="Response time for payment provider API calls",
    unit="s",
)


def record_order_placed(source: str) -> None:
    """Record a persisted order.

    Args:
        source: Flow that created the order ("order" or "checkout")
    """
    orders_placed_counter.add(1, {"source": source})


def record_order_rejected(reason: str) -> None:
    """Record an order placement that failed before persisting.

    Args:
        reason: Error type that caused the rejection
    """
    order_placement_failure_counter.add(1, {"reason": reason})


def record_status_change(status: str) -> None:
    order_status_change_counter.add(1, {"status": status})


def record_checkout_link_created(provider: str) -> None:
    checkout_links_counter.add(1, {"provider": provider})


def record_payment_provider_call(provider: str, operation: str, duration_seconds: float) -> None:
    """Record a payment provider API call.

    Args:
        provider: The payment provider that was called
        operation: The operation performed (e.g., "create_checkout_link")
        duration_seconds: Duration in seconds
    """
    payment_provider_response_time.record(
        duration_seconds, {"provider": provider, "operation": operation}
    )
