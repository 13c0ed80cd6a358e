"""
Purchase orders with line items.

Run: pytest tests/test_purchasing.py -v
"""

import pytest

from core.errors import Conflict, NotFound, ValidationError
from modules.purchasing.schemas import OrderItemIn, PurchaseOrderCreate, PurchaseOrderUpdate
from modules.purchasing.services import PurchaseOrderService


def _order(orders, number="PO-001", items=None, **fields):
    fields.setdefault("supplier", "Marine Supplies AS")
    return orders.create(PurchaseOrderCreate(order_number=number, items=items or [], **fields))


ITEMS = [
    OrderItemIn(name="Fuel filter", part_number="FLT-100", quantity=4, unit_price=12.5),
    OrderItemIn(name="Gasket", quantity=2, unit_price=3.0),
]


class TestCreate:

    def test_total_computed_from_items(self, orders):
        order = orders.get(_order(orders, items=ITEMS))
        assert order["total_amount"] == 56.0
        assert [i["name"] for i in order["items"]] == ["Fuel filter", "Gasket"]
        assert order["status"] == "pending"

    def test_explicit_total_kept(self, orders):
        assert orders.get(_order(orders, items=ITEMS, total_amount=50))["total_amount"] == 50

    def test_creator_name_joined(self, orders, make_user):
        user_id = make_user(name="Purser")
        assert orders.get(_order(orders, created_by=user_id))["created_by_name"] == "Purser"

    def test_unknown_creator(self, orders):
        with pytest.raises(NotFound):
            _order(orders, created_by=77)

    def test_duplicate_order_number(self, orders):
        _order(orders)
        with pytest.raises(Conflict):
            _order(orders)

    def test_bad_item_rolls_back_order(self, orders):
        with pytest.raises(ValidationError):
            _order(orders, items=[OrderItemIn(name=" ")])
        assert orders.list() == []

    def test_bad_item_rejected_before_any_write(self, recording_storage):
        with pytest.raises(ValidationError):
            _order(PurchaseOrderService(recording_storage), items=[*ITEMS, OrderItemIn(name="")])
        assert recording_storage.executed == []


class TestUpdateDelete:

    def test_items_replaced_and_total_recomputed(self, orders):
        order_id = _order(orders, items=ITEMS)
        orders.update(order_id, PurchaseOrderUpdate(
            status="ordered", items=[OrderItemIn(name="Impeller", quantity=1, unit_price=80)],
        ))
        order = orders.get(order_id)
        assert order["status"] == "ordered"
        assert order["total_amount"] == 80
        assert [i["name"] for i in order["items"]] == ["Impeller"]

    def test_bad_replacement_items_leave_order_untouched(self, orders, recording_storage):
        order_id = _order(orders, items=ITEMS)
        with pytest.raises(ValidationError):
            PurchaseOrderService(recording_storage).update(order_id, PurchaseOrderUpdate(
                status="ordered", items=[OrderItemIn(name=" ")],
            ))
        assert recording_storage.executed == []
        order = orders.get(order_id)
        assert order["status"] == "pending"
        assert len(order["items"]) == 2

    def test_status_only_keeps_items(self, orders):
        order_id = _order(orders, items=ITEMS)
        orders.update(order_id, PurchaseOrderUpdate(status="delivered"))
        order = orders.get(order_id)
        assert len(order["items"]) == 2
        assert order["total_amount"] == 56.0

    def test_update_missing(self, orders):
        with pytest.raises(NotFound):
            orders.update(3, PurchaseOrderUpdate(status="cancelled"))

    def test_delete_removes_items(self, orders):
        order_id = _order(orders, items=ITEMS)
        orders.delete(order_id)
        with pytest.raises(NotFound):
            orders.get(order_id)

    def test_list_newest_first_and_status_filter(self, orders):
        first = _order(orders, number="PO-001")
        second = _order(orders, number="PO-002", status="draft")
        assert [o["id"] for o in orders.list()] == [second, first]
        assert [o["id"] for o in orders.list(status="draft")] == [second]
