# src/routes/inventory.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import InventoryType, Operation, Resource
from schemas.base_schemas import CursorPage, PaginatedResponse
from schemas.inventory_schemas import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
    StockAdjustment,
)
from services.inventory_service import inventory_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/inventory", tags=["inventory"])
logger = setup_logger("INVENTORY_ROUTES")

can_read = ResourceGuard(Resource.INVENTORY, Operation.READ)
can_write = ResourceGuard(Resource.INVENTORY, Operation.WRITE)


def inventory_filters(
    type: Optional[InventoryType] = Query(None),
    reorder_needed: Optional[bool] = Query(
        None, alias="reorderNeeded", description="Only items at or below their reorder level"
    ),
) -> dict:
    return {"type": type, "reorderNeeded": reorder_needed}


@router.get("", response_model=PaginatedResponse[InventoryItem], summary="List inventory")
async def list_inventory(
    filters: dict = Depends(inventory_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await inventory_service.list(store, filters, page, limit)


@router.get("/cursor", response_model=CursorPage[InventoryItem], summary="Page through inventory")
async def page_inventory(
    filters: dict = Depends(inventory_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await inventory_service.fetch_page(store, filters, cursor, limit)


@router.post(
    "",
    response_model=InventoryItem,
    status_code=status.HTTP_201_CREATED,
    summary="Add inventory item",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_inventory_item(
    request: Request,
    item_data: InventoryItemCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await inventory_service.create(store, item_data, current_user)


@router.get("/{item_id}", response_model=InventoryItem, summary="Get inventory item")
async def get_inventory_item(
    item_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await inventory_service.get(store, item_id)


@router.patch("/{item_id}", response_model=InventoryItem, summary="Update inventory item")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_inventory_item(
    request: Request,
    item_id: str,
    item_data: InventoryItemUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await inventory_service.update(store, item_id, item_data, current_user)


@router.patch("/{item_id}/stock", response_model=InventoryItem, summary="Adjust stock")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def adjust_stock(
    request: Request,
    item_id: str,
    adjustment: StockAdjustment,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    """Apply a relative stock change; stock never goes negative"""
    return await inventory_service.adjust_stock(store, item_id, adjustment.delta, current_user)
