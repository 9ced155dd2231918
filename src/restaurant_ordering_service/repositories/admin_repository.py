"""DynamoDB repository for admin users."""

import logging

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from restaurant_ordering_service.exceptions import StoreError
from restaurant_ordering_service.models.admin_models import AdminUser

logger = logging.getLogger(__name__)


class AdminUserRepository:
    """Repository for admin accounts, keyed by lower-cased email."""

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def get_by_email(self, email: str) -> AdminUser | None:
        """Retrieve an admin by email.

        Raises:
            StoreError: If DynamoDB cannot be read
        """
        try:
            response = self.table.get_item(Key={"email": email.lower()})
        except ClientError as e:
            logger.error(f"Failed to get admin user: {e}")
            raise StoreError() from e

        if "Item" not in response:
            return None

        return AdminUser.from_dynamodb_item(response["Item"])

    def save_user(self, user: AdminUser) -> bool:
        """Save or replace an admin account."""
        user = user.model_copy(update={"email": user.email.lower()})
        try:
            self.table.put_item(Item=user.to_dynamodb_item())
            return True

        except ClientError as e:
            logger.error(f"Failed to save admin user: {e}")
            return False
