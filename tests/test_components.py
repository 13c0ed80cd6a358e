"""
Component registry: insert, update, delete, tree, details, running hours, SFI groups.

Run: pytest tests/test_components.py -v
"""

from datetime import date

import pytest

from core.errors import Conflict, NotFound, ValidationError
from modules.components.schemas import AttributeIn, ComponentCreate, ComponentUpdate
from modules.components.services import ComponentRegistry
from modules.components.sfi import MAIN_GROUPS, SUB_GROUPS
from modules.maintenance.schemas import HistoryEntryCreate, TaskCreate


class TestInsert:

    def test_returns_id_and_stores_fields(self, registry, make_component):
        cid = make_component(
            sfi_code="600", manufacturer="Marine Power Inc", model="ME-2000",
            installation_date=date(2019, 3, 1), criticality="high", running_hours=4382,
        )
        details = registry.get_details(cid)
        assert details["name"] == "Main Engine"
        assert details["type"] == "component"
        assert details["sfi_code"] == "600"
        assert details["installation_date"] == date(2019, 3, 1)
        assert details["criticality"] == "high"
        assert details["running_hours"] == 4382

    def test_defaults(self, registry, make_component):
        details = registry.get_details(make_component())
        assert details["criticality"] == "medium"
        assert details["running_hours"] == 0
        assert details["parent_id"] is None

    def test_sfi_code_is_trimmed(self, registry, make_component):
        assert registry.get_details(make_component(sfi_code=" 6001 "))["sfi_code"] == "6001"

    @pytest.mark.parametrize("code", ["60A", "123456", "6.0", "-1"])
    def test_malformed_sfi_code_rejected(self, make_component, code):
        with pytest.raises(ValidationError):
            make_component(sfi_code=code)

    def test_blank_name_rejected(self, make_component):
        with pytest.raises(ValidationError):
            make_component(name="   ")

    def test_missing_parent(self, make_component):
        with pytest.raises(NotFound):
            make_component(parent_id=999)

    def test_attributes_inserted_with_component(self, registry, make_component):
        cid = make_component(attributes=[AttributeIn(name="Bore", value="500 mm"),
                                         AttributeIn(name="Stroke", value="2000 mm")])
        assert registry.get_details(cid)["attributes"] == [
            {"name": "Bore", "value": "500 mm"},
            {"name": "Stroke", "value": "2000 mm"},
        ]

    def test_bad_attribute_rolls_back_component(self, registry, make_component):
        with pytest.raises(ValidationError):
            make_component(attributes=[AttributeIn(name="Bore", value="1"), AttributeIn(name=" ")])
        assert registry.list() == []

    def test_bad_attribute_rejected_before_any_write(self, recording_storage):
        with pytest.raises(ValidationError):
            ComponentRegistry(recording_storage).insert(ComponentCreate(
                name="Main Engine", type="component", attributes=[AttributeIn(name=" ")],
            ))
        assert recording_storage.executed == []


class TestTreeAndDetails:

    def test_tree_single_root_children_ordered_by_code(self, registry, make_component):
        a = make_component(name="A", type="system", sfi_code="6")
        c = make_component(name="C", parent_id=a, sfi_code="62")
        b = make_component(name="B", parent_id=a, sfi_code="60")
        tree = registry.get_tree()
        assert [n["id"] for n in tree] == [a]
        assert [n["id"] for n in tree[0]["children"]] == [b, c]

    def test_details_parent_and_children(self, registry, make_component):
        parent = make_component(name="Main Engine", type="system", sfi_code="60")
        engine = make_component(name="Main Diesel Engine", parent_id=parent, sfi_code="600")
        make_component(name="Fuel Injection", parent_id=engine, sfi_code="6003")
        make_component(name="Crankshaft", parent_id=engine, sfi_code="6001")

        details = registry.get_details(engine)
        assert details["parent"] == {"id": parent, "name": "Main Engine", "sfi_code": "60"}
        assert [c["sfi_code"] for c in details["children"]] == ["6001", "6003"]
        assert set(details["children"][0]) == {"id", "name", "sfi_code", "type"}

    def test_root_has_no_parent(self, registry, make_component):
        assert registry.get_details(make_component())["parent"] is None

    def test_details_are_idempotent(self, registry, make_component):
        root = make_component(type="system", sfi_code="6")
        cid = make_component(name="Engine", parent_id=root, attributes=[AttributeIn(name="k", value="v")])
        make_component(name="Child", parent_id=cid)
        assert registry.get_details(cid) == registry.get_details(cid)

    def test_details_missing(self, registry):
        with pytest.raises(NotFound):
            registry.get_details(42)


class TestList:

    def test_filters(self, registry, make_component):
        machinery = make_component(name="Machinery", type="system", sfi_code="6")
        make_component(name="Main Diesel Engine", parent_id=machinery, sfi_code="600")
        make_component(name="Propeller", parent_id=machinery, sfi_code="631")
        make_component(name="Hull", type="system", sfi_code="2")

        assert [r["name"] for r in registry.list(roots_only=True)] == ["Hull", "Machinery"]
        assert [r["sfi_code"] for r in registry.list(parent_id=machinery)] == ["600", "631"]
        assert [r["sfi_code"] for r in registry.list(sfi_code="6")] == ["6", "600", "631"]
        assert [r["name"] for r in registry.list(search="diesel")] == ["Main Diesel Engine"]


class TestUpdate:

    def test_provided_fields_replaced(self, registry, make_component):
        cid = make_component(manufacturer="Old", model="X1")
        registry.update(cid, ComponentUpdate(manufacturer="New", criticality="low"))
        details = registry.get_details(cid)
        assert details["manufacturer"] == "New"
        assert details["model"] == "X1"
        assert details["criticality"] == "low"

    def test_explicit_null_clears_field(self, registry, make_component):
        cid = make_component(manufacturer="Old")
        registry.update(cid, ComponentUpdate(manufacturer=None))
        assert registry.get_details(cid)["manufacturer"] is None

    def test_attributes_replaced_as_a_set(self, registry, make_component):
        cid = make_component(attributes=[AttributeIn(name="a", value="1"), AttributeIn(name="b", value="2")])
        registry.update(cid, ComponentUpdate(attributes=[AttributeIn(name="c", value="3")]))
        assert registry.get_details(cid)["attributes"] == [{"name": "c", "value": "3"}]

    def test_attributes_untouched_when_omitted(self, registry, make_component):
        cid = make_component(attributes=[AttributeIn(name="a", value="1")])
        registry.update(cid, ComponentUpdate(name="Renamed"))
        assert registry.get_details(cid)["attributes"] == [{"name": "a", "value": "1"}]

    def test_bad_attribute_list_rejected_before_any_write(self, registry, recording_storage, make_component):
        cid = make_component(attributes=[AttributeIn(name="a", value="1")])
        with pytest.raises(ValidationError):
            ComponentRegistry(recording_storage).update(cid, ComponentUpdate(
                name="Renamed", attributes=[AttributeIn(name="")],
            ))
        assert recording_storage.executed == []
        details = registry.get_details(cid)
        assert details["name"] == "Main Engine"
        assert details["attributes"] == [{"name": "a", "value": "1"}]

    def test_missing(self, registry):
        with pytest.raises(NotFound):
            registry.update(7, ComponentUpdate(name="x"))

    def test_reparent(self, registry, make_component):
        a = make_component(name="A", type="system")
        b = make_component(name="B", type="system")
        child = make_component(name="Child", parent_id=a)
        registry.update(child, ComponentUpdate(parent_id=b))
        assert registry.get_details(child)["parent"]["id"] == b

    def test_move_to_root(self, registry, make_component):
        a = make_component(name="A", type="system")
        child = make_component(name="Child", parent_id=a)
        registry.update(child, ComponentUpdate(parent_id=None))
        assert registry.get_details(child)["parent"] is None

    def test_cannot_parent_to_self(self, registry, make_component):
        cid = make_component()
        with pytest.raises(Conflict):
            registry.update(cid, ComponentUpdate(parent_id=cid))

    def test_cannot_parent_to_descendant(self, registry, make_component):
        a = make_component(name="A")
        b = make_component(name="B", parent_id=a)
        c = make_component(name="C", parent_id=b)
        with pytest.raises(Conflict):
            registry.update(a, ComponentUpdate(parent_id=c))

    def test_unknown_parent(self, registry, make_component):
        cid = make_component()
        with pytest.raises(NotFound):
            registry.update(cid, ComponentUpdate(parent_id=500))


class TestDelete:

    def test_leaf_deleted_with_attributes(self, registry, make_component):
        cid = make_component(attributes=[AttributeIn(name="a", value="1")])
        registry.delete(cid)
        with pytest.raises(NotFound):
            registry.get_details(cid)

    def test_blocked_by_children(self, registry, make_component):
        parent = make_component(type="system")
        make_component(name="Child", parent_id=parent)
        with pytest.raises(Conflict):
            registry.delete(parent)
        assert registry.get_details(parent)["id"] == parent

    def test_blocked_by_task(self, registry, scheduler, make_component):
        cid = make_component(sfi_code="600")
        scheduler.create(TaskCreate(component_id=cid, name="Oil Change", interval_hours=200))
        with pytest.raises(Conflict):
            registry.delete(cid)

    def test_blocked_by_adhoc_history(self, registry, history_log, make_component):
        cid = make_component()
        history_log.record(HistoryEntryCreate(component_id=cid, name="Leak repair"))
        with pytest.raises(Conflict):
            registry.delete(cid)

    def test_missing(self, registry):
        with pytest.raises(NotFound):
            registry.delete(3)


class TestRunningHours:

    def test_counter_moves_forward(self, registry, make_component):
        cid = make_component(running_hours=100)
        assert registry.record_running_hours(cid, 150) == {"previous": 100, "running_hours": 150}
        assert registry.get_details(cid)["running_hours"] == 150

    def test_same_reading_accepted(self, registry, make_component):
        cid = make_component(running_hours=100)
        registry.record_running_hours(cid, 100)

    def test_counter_never_goes_back(self, registry, make_component):
        cid = make_component(running_hours=100)
        with pytest.raises(ValidationError):
            registry.record_running_hours(cid, 99)
        assert registry.get_details(cid)["running_hours"] == 100

    def test_missing_component(self, registry):
        with pytest.raises(NotFound):
            registry.record_running_hours(1, 10)


class TestSfiGroups:

    def test_import_once(self, registry):
        first = registry.import_sfi_groups()
        second = registry.import_sfi_groups()
        assert first["created"] == len(MAIN_GROUPS) + len(SUB_GROUPS)
        assert second["created"] == 0
        assert len(registry.list_sfi_groups()) == first["created"]

    def test_sub_groups_point_at_main_group(self, registry):
        registry.import_sfi_groups()
        groups = {g["code"]: g for g in registry.list_sfi_groups()}
        assert groups["60"]["parent_code"] == "6"
        assert groups["60"]["level"] == 2
        assert groups["6"]["parent_code"] is None
        assert groups["6"]["level"] == 1

    def test_ordered_by_code(self, registry):
        registry.import_sfi_groups()
        codes = [g["code"] for g in registry.list_sfi_groups()]
        assert codes == sorted(codes)


def test_create_schema_requires_type():
    import pydantic
    with pytest.raises(pydantic.ValidationError):
        ComponentCreate(name="No type")
