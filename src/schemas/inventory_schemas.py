# src/schemas/inventory_schemas.py
from pydantic import Field
from typing import Optional
from models.enums import InventoryType
from .base_schemas import BaseSchema, WriteSchema, IDMixin, TimestampMixin, AuthorMixin


class InventoryItemBase(BaseSchema):
    name: str = Field(..., min_length=1)
    type: InventoryType
    quantity: int = Field(0, ge=0)
    unit: str
    reorder_level: int = Field(10, ge=0)
    price: Optional[float] = Field(None, ge=0)


class InventoryItemCreate(InventoryItemBase, WriteSchema):
    pass


class InventoryItemUpdate(WriteSchema):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[InventoryType] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None
    reorder_level: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)


class StockAdjustment(WriteSchema):
    """Relative stock change; negative values consume stock"""

    delta: int


class InventoryItem(IDMixin, InventoryItemBase, AuthorMixin, TimestampMixin):
    """Stored inventory document"""

    @property
    def reorder_needed(self) -> bool:
        return self.quantity <= self.reorder_level
