"""DynamoDB repository for orders."""

import logging
from typing import Any

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from restaurant_ordering_service.exceptions import StoreError
from restaurant_ordering_service.models.order_models import Order, OrderStatusEnum

logger = logging.getLogger(__name__)


class OrderRepository:
    """Repository for order CRUD operations.

    Manages order records in DynamoDB with ``id`` as partition key. Orders
    are never deleted.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def save_order(self, order: Order) -> bool:
        """Save an order.

        Args:
            order: Order to save

        Returns:
            bool: True if save succeeded, False otherwise
        """
        try:
            self.table.put_item(Item=order.to_dynamodb_item())
            return True

        except ClientError as e:
            logger.error(f"Failed to save order {order.id}: {e}")
            return False

    def get_order(self, order_id: str) -> Order | None:
        """Retrieve an order by ID.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise

        Raises:
            StoreError: If DynamoDB cannot be read
        """
        try:
            response = self.table.get_item(Key={"id": order_id})
        except ClientError as e:
            logger.error(f"Failed to get order {order_id}: {e}")
            raise StoreError() from e

        if "Item" not in response:
            return None

        return Order.from_dynamodb_item(response["Item"])

    def update_status(self, order_id: str, status: OrderStatusEnum) -> bool:
        """Overwrite the status of an order.

        Args:
            order_id: Order identifier
            status: New status

        Returns:
            bool: True if update succeeded, False otherwise
        """
        try:
            self.table.update_item(
                Key={"id": order_id},
                UpdateExpression="SET #status = :status",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={":status": status.value},
            )
            return True

        except ClientError as e:
            logger.error(f"Failed to update status for order {order_id}: {e}")
            return False

    def list_orders(self, status: OrderStatusEnum | None = None) -> list[Order]:
        """List orders, newest first, optionally filtered by status.

        Args:
            status: Optional status filter

        Returns:
            list: Matching Order objects (empty list if none found)

        Raises:
            StoreError: If DynamoDB cannot be read
        """
        scan_kwargs: dict[str, Any] = {}
        if status is not None:
            scan_kwargs["FilterExpression"] = "#status = :status"
            scan_kwargs["ExpressionAttributeNames"] = {"#status": "status"}
            scan_kwargs["ExpressionAttributeValues"] = {":status": status.value}

        raw_orders: list[dict[str, Any]] = []
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                raw_orders.extend(response.get("Items", []))

                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.error(f"Failed to list orders: {e}")
            raise StoreError() from e

        orders = [Order.from_dynamodb_item(item) for item in raw_orders]
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
