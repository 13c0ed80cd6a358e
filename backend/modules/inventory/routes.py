"""Inventory routes: spare parts and stock adjustments."""

from typing import Optional

from fastapi import APIRouter, Depends

from core.db import Storage
from core.dependencies import get_storage
from modules.inventory.schemas import PartCreate, PartUpdate, StockAdjustment
from modules.inventory.services import PartService

router = APIRouter()


def get_part_service(storage: Storage = Depends(get_storage)) -> PartService:
    return PartService(storage)


@router.get("/parts", tags=["Inventory"])
def list_parts(search: Optional[str] = None, low_stock: bool = False,
               service: PartService = Depends(get_part_service)):
    return service.list(search=search, low_stock=low_stock)


# Static path registered before /parts/{part_id}
@router.get("/parts/low-stock", tags=["Inventory"])
def low_stock_parts(service: PartService = Depends(get_part_service)):
    return service.low_stock()


@router.get("/parts/{part_id}", tags=["Inventory"])
def get_part(part_id: int, service: PartService = Depends(get_part_service)):
    return service.get(part_id)


@router.post("/parts", tags=["Inventory"])
def create_part(data: PartCreate, service: PartService = Depends(get_part_service)):
    part_id = service.create(data)
    return {"success": True, "id": part_id}


@router.put("/parts/{part_id}", tags=["Inventory"])
def update_part(part_id: int, data: PartUpdate, service: PartService = Depends(get_part_service)):
    service.update(part_id, data)
    return {"success": True}


@router.delete("/parts/{part_id}", tags=["Inventory"])
def delete_part(part_id: int, service: PartService = Depends(get_part_service)):
    service.delete(part_id)
    return {"success": True}


@router.post("/parts/{part_id}/adjust", tags=["Inventory"])
def adjust_stock(part_id: int, data: StockAdjustment, service: PartService = Depends(get_part_service)):
    """Add (positive) or consume (negative) stock."""
    result = service.adjust_stock(part_id, data.quantity, data.notes)
    return {"success": True, **result}
