"""DynamoDB repository for menu items.

Writes use simple return values (False) for expected failures; the service
layer decides how to surface them. Reads distinguish a missing item (None)
from an unreachable store (StoreError).
"""

import logging
from typing import Any

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from restaurant_ordering_service.exceptions import StoreError
from restaurant_ordering_service.models.menu_models import MenuItem

logger = logging.getLogger(__name__)


class MenuItemRepository:
    """Repository for menu item CRUD operations.

    Manages menu item records in DynamoDB with ``id`` as partition key.
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

    def get_item(self, item_id: str) -> MenuItem | None:
        """Retrieve a menu item by ID.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found, None otherwise

        Raises:
            StoreError: If DynamoDB cannot be read
        """
        try:
            response = self.table.get_item(Key={"id": item_id})
        except ClientError as e:
            logger.error(f"Failed to get menu item {item_id}: {e}")
            raise StoreError() from e

        if "Item" not in response:
            return None

        return MenuItem.from_dynamodb_item(response["Item"])

    def list_items(self) -> list[MenuItem]:
        """List every menu item, oldest first.

        Returns:
            list: All MenuItem objects (empty list if none exist)

        Raises:
            StoreError: If DynamoDB cannot be read
        """
        raw_items: list[dict[str, Any]] = []
        scan_kwargs: dict[str, Any] = {}

        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                raw_items.extend(response.get("Items", []))

                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.error(f"Failed to list menu items: {e}")
            raise StoreError() from e

        items = [MenuItem.from_dynamodb_item(item) for item in raw_items]
        return sorted(items, key=lambda item: item.created_at)

    def save_item(self, item: MenuItem) -> bool:
        """Save or replace a menu item.

        Args:
            item: MenuItem to save

        Returns:
            bool: True if save succeeded, False otherwise
        """
        try:
            self.table.put_item(Item=item.to_dynamodb_item())
            return True

        except ClientError as e:
            logger.error(f"Failed to save menu item {item.id}: {e}")
            return False

    def delete_item(self, item_id: str) -> bool:
        """Delete a menu item.

        Args:
            item_id: Menu item identifier

        Returns:
            bool: True if delete succeeded, False otherwise
        """
        try:
            self.table.delete_item(Key={"id": item_id})
            return True

        except ClientError as e:
            logger.error(f"Failed to delete menu item {item_id}: {e}")
            return False
