"""Purchasing routes: purchase orders with line items."""

from typing import Optional

from fastapi import APIRouter, Depends

from core.base import PurchaseOrderStatus
from core.db import Storage
from core.dependencies import get_storage
from modules.purchasing.schemas import PurchaseOrderCreate, PurchaseOrderUpdate
from modules.purchasing.services import PurchaseOrderService

router = APIRouter()


def get_order_service(storage: Storage = Depends(get_storage)) -> PurchaseOrderService:
    return PurchaseOrderService(storage)


@router.get("/purchase-orders", tags=["Purchasing"])
def list_orders(status: Optional[PurchaseOrderStatus] = None,
                service: PurchaseOrderService = Depends(get_order_service)):
    return service.list(status=status.value if status else None)


@router.get("/purchase-orders/{order_id}", tags=["Purchasing"])
def get_order(order_id: int, service: PurchaseOrderService = Depends(get_order_service)):
    return service.get(order_id)


@router.post("/purchase-orders", tags=["Purchasing"])
def create_order(data: PurchaseOrderCreate, service: PurchaseOrderService = Depends(get_order_service)):
    order_id = service.create(data)
    return {"success": True, "id": order_id}


@router.put("/purchase-orders/{order_id}", tags=["Purchasing"])
def update_order(order_id: int, data: PurchaseOrderUpdate,
                 service: PurchaseOrderService = Depends(get_order_service)):
    service.update(order_id, data)
    return {"success": True}


@router.delete("/purchase-orders/{order_id}", tags=["Purchasing"])
def delete_order(order_id: int, service: PurchaseOrderService = Depends(get_order_service)):
    service.delete(order_id)
    return {"success": True}
