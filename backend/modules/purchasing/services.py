"""
purchasing/services.py: Purchase orders and their line items.

An order and its items are always written in the same transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update

from core.db import Storage
from core.errors import Conflict, NotFound, ValidationError
from modules.purchasing.models import items_table as items, orders_table as orders
from modules.purchasing.schemas import OrderItemIn, PurchaseOrderCreate, PurchaseOrderUpdate
from modules.users.models import users_table as users

log = logging.getLogger("shipmaint.purchasing")


def order_total(order_items: List[OrderItemIn]) -> float:
    return sum(item.quantity * item.unit_price for item in order_items)


class PurchaseOrderService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def _select(self):
        return (
            select(orders, users.c.name.label("created_by_name"))
            .select_from(orders.outerjoin(users, orders.c.created_by == users.c.id))
        )

    def _items(self, order_id: int) -> List[dict]:
        return self.storage.query_many(
            select(items).where(items.c.purchase_order_id == order_id).order_by(items.c.id)
        )

    @staticmethod
    def _check_items(order_items: List[OrderItemIn]) -> None:
        if any(not item.name.strip() for item in order_items):
            raise ValidationError("Item name is required")

    def _insert_items(self, order_id: int, order_items: List[OrderItemIn]) -> None:
        for item in order_items:
            self.storage.execute(insert(items).values(
                purchase_order_id=order_id,
                name=item.name.strip(),
                part_number=item.part_number,
                quantity=item.quantity,
                unit_price=item.unit_price,
            ))

    def _check_order_number_free(self, order_number: str, exclude_id: int = None) -> None:
        stmt = select(orders.c.id).where(orders.c.order_number == order_number)
        if exclude_id is not None:
            stmt = stmt.where(orders.c.id != exclude_id)
        if self.storage.query_one(stmt):
            raise Conflict("Order number already exists")

    def list(self, status: Optional[str] = None) -> List[dict]:
        """Orders newest first, each with its items."""
        stmt = self._select().order_by(orders.c.created_at.desc(), orders.c.id.desc())
        if status:
            stmt = stmt.where(orders.c.status == status)
        result = self.storage.query_many(stmt)
        for order in result:
            order["items"] = self._items(order["id"])
        return result

    def get(self, order_id: int) -> dict:
        order = self.storage.query_one(self._select().where(orders.c.id == order_id))
        if not order:
            raise NotFound(f"Purchase order {order_id} not found")
        order["items"] = self._items(order_id)
        return order

    def create(self, data: PurchaseOrderCreate) -> int:
        for field in ("order_number", "supplier"):
            if not getattr(data, field).strip():
                raise ValidationError(f"{field} is required")
        self._check_items(data.items)
        total = data.total_amount if data.total_amount is not None else order_total(data.items)

        with self.storage.transaction():
            self._check_order_number_free(data.order_number.strip())
            if data.created_by is not None and not self.storage.query_one(
                select(users.c.id).where(users.c.id == data.created_by)
            ):
                raise NotFound(f"User {data.created_by} not found")
            result = self.storage.execute(insert(orders).values(
                order_number=data.order_number.strip(),
                supplier=data.supplier.strip(),
                status=data.status.value,
                total_amount=total,
                created_by=data.created_by,
                notes=data.notes,
            ))
            self._insert_items(result.inserted_id, data.items)
        log.info(f"Created purchase order {data.order_number} ({len(data.items)} items)")
        return result.inserted_id

    def update(self, order_id: int, data: PurchaseOrderUpdate) -> None:
        """Update the order; a provided item list replaces the existing items."""
        fields = data.model_dump(exclude_unset=True)
        new_items = fields.pop("items", None)
        for key in ("order_number", "supplier", "status"):
            if key in fields and not fields[key]:
                raise ValidationError(f"{key} cannot be empty")
        for key in ("order_number", "supplier"):
            if key in fields:
                fields[key] = fields[key].strip()
        if "status" in fields:
            fields["status"] = fields["status"].value
        if new_items is not None:
            self._check_items(data.items)
        if new_items is not None and fields.get("total_amount") is None:
            fields["total_amount"] = order_total(data.items)
        elif "total_amount" in fields and fields["total_amount"] is None:
            fields.pop("total_amount")

        with self.storage.transaction():
            if not self.storage.query_one(select(orders.c.id).where(orders.c.id == order_id)):
                raise NotFound(f"Purchase order {order_id} not found")
            if "order_number" in fields:
                self._check_order_number_free(fields["order_number"], exclude_id=order_id)
            if fields:
                self.storage.execute(update(orders).where(orders.c.id == order_id).values(**fields))
            if new_items is not None:
                self.storage.execute(delete(items).where(items.c.purchase_order_id == order_id))
                self._insert_items(order_id, data.items)

    def delete(self, order_id: int) -> None:
        with self.storage.transaction():
            if not self.storage.query_one(select(orders.c.id).where(orders.c.id == order_id)):
                raise NotFound(f"Purchase order {order_id} not found")
            self.storage.execute(delete(items).where(items.c.purchase_order_id == order_id))
            self.storage.execute(delete(orders).where(orders.c.id == order_id))
