"""Unit tests for MenuService."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from restaurant_ordering_service.exceptions import (
    ItemUnavailableError,
    NotFoundError,
    StoreError,
)
from restaurant_ordering_service.models.menu_models import MenuItem, MenuItemCreate, MenuItemUpdate
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.services.menu_service import MenuService


@pytest.mark.unit
class TestMenuService:
    """Test suite for MenuService."""

    @pytest.fixture
    def mock_repository(self) -> MenuItemRepository:
        """Create a mock MenuItemRepository."""
        repo = MagicMock(spec=MenuItemRepository)
        repo.save_item.return_value = True
        repo.delete_item.return_value = True
        return repo

    @pytest.fixture
    def menu_service(self, mock_repository: MenuItemRepository) -> MenuService:
        """Create a MenuService with mocked dependencies."""
        return MenuService(mock_repository)

    @pytest.mark.asyncio
    async def test_list_items(
        self,
        menu_service: MenuService,
        mock_repository: MagicMock,
        pizza: MenuItem,
        salad: MenuItem,
    ) -> None:
        """Test listing returns every repository item."""
        mock_repository.list_items.return_value = [pizza, salad]

        assert await menu_service.list_items() == [pizza, salad]

    @pytest.mark.asyncio
    async def test_get_item_not_found(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test fetching a missing item raises NotFoundError."""
        mock_repository.get_item.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await menu_service.get_item("a1b2c3d4e5f6a7b8c9d0e1f2")

        assert exc_info.value.message == "Menu item not found"

    @pytest.mark.asyncio
    async def test_get_available_item(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test resolving an available item."""
        mock_repository.get_item.return_value = pizza

        assert await menu_service.get_available_item(pizza.id) is pizza

    @pytest.mark.asyncio
    async def test_get_available_item_rejects_unavailable(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test that an unavailable item cannot be ordered."""
        mock_repository.get_item.return_value = pizza.model_copy(update={"available": False})

        with pytest.raises(ItemUnavailableError) as exc_info:
            await menu_service.get_available_item(pizza.id)

        assert exc_info.value.message == f"Item with ID {pizza.id} is not available"

    @pytest.mark.asyncio
    async def test_get_available_item_rejects_missing(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza_id: str
    ) -> None:
        """Test that a missing item is reported the same way as an unavailable one."""
        mock_repository.get_item.return_value = None

        with pytest.raises(ItemUnavailableError) as exc_info:
            await menu_service.get_available_item(pizza_id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.item_id == pizza_id

    @pytest.mark.asyncio
    async def test_create_item(self, menu_service: MenuService, mock_repository: MagicMock) -> None:
        """Test creating an item assigns an ID and saves it."""
        request = MenuItemCreate(name="Lemonade", price=Decimal("3.49"), category="Drink")

        item = await menu_service.create_item(request)

        assert len(item.id) == 24
        assert item.price == Decimal("3.49")
        assert item.available is True
        mock_repository.save_item.assert_called_once_with(item)

    @pytest.mark.asyncio
    async def test_create_item_store_failure(
        self, menu_service: MenuService, mock_repository: MagicMock
    ) -> None:
        """Test that a failed save raises StoreError."""
        mock_repository.save_item.return_value = False

        with pytest.raises(StoreError):
            await menu_service.create_item(
                MenuItemCreate(name="Lemonade", price=Decimal("3.49"), category="Drink")
            )

    @pytest.mark.asyncio
    async def test_update_item_keeps_unspecified_fields(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test that a partial update only changes the supplied fields."""
        mock_repository.get_item.return_value = pizza

        updated = await menu_service.update_item(pizza.id, MenuItemUpdate(price=Decimal("11.49")))

        assert updated.price == Decimal("11.49")
        assert updated.name == pizza.name
        assert updated.description == pizza.description
        assert updated.category == pizza.category
        assert updated.available is True
        assert updated.id == pizza.id
        mock_repository.save_item.assert_called_once_with(updated)

    @pytest.mark.asyncio
    async def test_update_item_toggle_availability(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test marking an item unavailable."""
        mock_repository.get_item.return_value = pizza

        updated = await menu_service.update_item(pizza.id, MenuItemUpdate(available=False))

        assert updated.available is False
        assert updated.price == pizza.price

    @pytest.mark.asyncio
    async def test_update_item_not_found(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza_id: str
    ) -> None:
        """Test updating a missing item raises NotFoundError without saving."""
        mock_repository.get_item.return_value = None

        with pytest.raises(NotFoundError):
            await menu_service.update_item(pizza_id, MenuItemUpdate(name="New"))

        mock_repository.save_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_item(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test deleting an existing item."""
        mock_repository.get_item.return_value = pizza

        await menu_service.delete_item(pizza.id)

        mock_repository.delete_item.assert_called_once_with(pizza.id)

    @pytest.mark.asyncio
    async def test_delete_item_twice_reports_not_found(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test that deleting an already deleted item raises NotFoundError."""
        mock_repository.get_item.side_effect = [pizza, None]

        await menu_service.delete_item(pizza.id)
        with pytest.raises(NotFoundError):
            await menu_service.delete_item(pizza.id)

        mock_repository.delete_item.assert_called_once_with(pizza.id)

    @pytest.mark.asyncio
    async def test_delete_item_store_failure(
        self, menu_service: MenuService, mock_repository: MagicMock, pizza: MenuItem
    ) -> None:
        """Test that a failed delete raises StoreError."""
        mock_repository.get_item.return_value = pizza
        mock_repository.delete_item.return_value = False

        with pytest.raises(StoreError):
            await menu_service.delete_item(pizza.id)
