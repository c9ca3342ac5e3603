# src/services/inventory_service.py
from models.enums import ActivityType, Resource
from utils.exceptions import ValidationError
from utils.logger import setup_logger
from .activity_service import activity_service
from .base_service import DocumentService

logger = setup_logger("INVENTORY_SERVICE")


class InventoryService(DocumentService):
    def __init__(self):
        super().__init__(Resource.INVENTORY)

    async def adjust_stock(self, store, item_id: str, delta: int, actor=None):
        """Add ``delta`` to the stock level; stock never drops below zero"""
        item = await self.get(store, item_id)
        quantity = item.quantity + delta
        if quantity < 0:
            raise ValidationError(
                f"Insufficient stock for {item.name}: {item.quantity} {item.unit} available"
            )

        updated = await self.apply_update(store, item_id, {"quantity": quantity}, actor)
        logger.info(f"Stock of {item.name} changed by {delta} to {quantity}")

        if updated.reorder_needed:
            logger.warning(
                f"{item.name} at or below reorder level ({quantity}/{item.reorder_level})"
            )

        await activity_service.record(
            store,
            ActivityType.INVENTORY_UPDATED,
            title="Inventory Updated",
            description=f"{item.name} stock changed by {delta}",
            user_id=actor.id if actor else None,
            related_id=item_id,
        )
        return updated


inventory_service = InventoryService()
