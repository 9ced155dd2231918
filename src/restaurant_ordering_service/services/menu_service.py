"""Menu catalog service."""

import logging

from restaurant_ordering_service.exceptions import ItemUnavailableError, NotFoundError, StoreError
from restaurant_ordering_service.models.menu_models import MenuItem, MenuItemCreate, MenuItemUpdate
from restaurant_ordering_service.observability import traced
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository

logger = logging.getLogger(__name__)


class MenuService:
    """Service for managing the menu catalog.

    Wraps the menu repository with the catalog's business rules: required
    fields, positive prices, partial updates and NotFound semantics. It is
    also the lookup used by the order flows to resolve requested items.
    """

    def __init__(self, menu_repository: MenuItemRepository) -> None:
        """Initialize the MenuService.

        Args:
            menu_repository: Repository for storing menu items
        """
        self.menu_repository = menu_repository

    async def list_items(self) -> list[MenuItem]:
        """Return every menu item, oldest first."""
        return self.menu_repository.list_items()

    async def get_item(self, item_id: str) -> MenuItem:
        """Get a menu item by ID.

        Raises:
            NotFoundError: If no item has this ID
        """
        item = self.menu_repository.get_item(item_id)
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    async def get_available_item(self, item_id: str) -> MenuItem:
        """Resolve a menu item an order may reference.

        Args:
            item_id: Requested menu item ID

        Returns:
            MenuItem: The item, guaranteed to be available

        Raises:
            ItemUnavailableError: If the item is missing or marked unavailable
        """
        item = self.menu_repository.get_item(item_id)
        if item is None or not item.available:
            raise ItemUnavailableError(item_id)
        return item

    @traced("menu.create_item")
    async def create_item(self, request: MenuItemCreate) -> MenuItem:
        """Create a menu item.

        Args:
            request: Validated create request

        Returns:
            MenuItem: The stored item including its generated ID

        Raises:
            StoreError: If the item could not be saved
        """
        item = MenuItem(**request.model_dump())

        if not self.menu_repository.save_item(item):
            raise StoreError()

        logger.info(f"Created menu item {item.id} ({item.name})")
        return item

    @traced("menu.update_item")
    async def update_item(self, item_id: str, request: MenuItemUpdate) -> MenuItem:
        """Apply a partial update to a menu item.

        Fields absent from the request are left unchanged.

        Raises:
            NotFoundError: If no item has this ID
            StoreError: If the item could not be saved
        """
        item = await self.get_item(item_id)
        changes = request.changes()
        updated = item.model_copy(update=changes)

        if not self.menu_repository.save_item(updated):
            raise StoreError()

        logger.info(f"Updated menu item {item_id}: {', '.join(sorted(changes)) or 'no changes'}")
        return updated

    @traced("menu.delete_item")
    async def delete_item(self, item_id: str) -> None:
        """Delete a menu item.

        Existing orders keep their captured prices.

        Raises:
            NotFoundError: If no item has this ID, including one already deleted
            StoreError: If the item could not be deleted
        """
        await self.get_item(item_id)

        if not self.menu_repository.delete_item(item_id):
            raise StoreError()

        logger.info(f"Deleted menu item {item_id}")
