"""
components/services.py: Component registry.

Stores the component tree as flat rows with a nullable parent_id. Parents
must exist before their children are inserted, so inserts cannot create a
cycle; re-parenting on update is checked against the current descendants.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update

from core.db import Storage
from core.errors import Conflict, NotFound, ValidationError
from modules.components.models import (
    attributes_table as attributes,
    components_table as components,
    sfi_groups_table as sfi_groups,
)
from modules.components.schemas import AttributeIn, ComponentCreate, ComponentUpdate
from modules.components.sfi import MAIN_GROUPS, SUB_GROUPS, normalize_sfi_code, parent_code
from modules.components.tree import build_tree, descendant_ids, sibling_key
from modules.maintenance.models import history_table as history, tasks_table as tasks

log = logging.getLogger("shipmaint.components")

_TREE_COLUMNS = (
    components.c.id, components.c.name, components.c.parent_id, components.c.type,
    components.c.sfi_code, components.c.manufacturer, components.c.model,
    components.c.running_hours, components.c.criticality,
)
_SUMMARY_COLUMNS = (components.c.id, components.c.name, components.c.sfi_code, components.c.type)


def _enum_value(value):
    return getattr(value, "value", value)


class ComponentRegistry:
    def __init__(self, storage: Storage):
        self.storage = storage

    # -------------- Lookups --------------

    def _find(self, component_id: int) -> Optional[dict]:
        return self.storage.query_one(select(components).where(components.c.id == component_id))

    def _require(self, component_id: int) -> dict:
        component = self._find(component_id)
        if not component:
            raise NotFound(f"Component {component_id} not found")
        return component

    def exists(self, component_id: int) -> bool:
        return self.storage.query_one(
            select(components.c.id).where(components.c.id == component_id)
        ) is not None

    @staticmethod
    def _check_attributes(items: List[AttributeIn]) -> None:
        if any(not attr.name or not attr.name.strip() for attr in items):
            raise ValidationError("Attribute name is required")

    def _insert_attributes(self, component_id: int, items: List[AttributeIn]) -> None:
        for attr in items:
            self.storage.execute(insert(attributes).values(
                component_id=component_id, name=attr.name.strip(), value=attr.value,
            ))

    # -------------- Mutations --------------

    def insert(self, data: ComponentCreate) -> int:
        """Insert a component (and its initial attributes) and return the new id."""
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Component name is required")
        if data.type is None:
            raise ValidationError("Component type is required")
        sfi_code = normalize_sfi_code(data.sfi_code)
        self._check_attributes(data.attributes or [])

        with self.storage.transaction():
            if data.parent_id is not None and not self.exists(data.parent_id):
                raise NotFound(f"Parent component {data.parent_id} not found")

            result = self.storage.execute(insert(components).values(
                name=name,
                parent_id=data.parent_id,
                type=_enum_value(data.type),
                sfi_code=sfi_code,
                technical_specs=data.technical_specs,
                manufacturer=data.manufacturer,
                model=data.model,
                serial_number=data.serial_number,
                installation_date=data.installation_date,
                warranty_expiry=data.warranty_expiry,
                criticality=_enum_value(data.criticality),
                running_hours=data.running_hours or 0,
            ))
            self._insert_attributes(result.inserted_id, data.attributes or [])
        return result.inserted_id

    def update(self, component_id: int, data: ComponentUpdate) -> None:
        """Replace the provided fields. A provided attribute list replaces the whole set."""
        fields = data.model_dump(exclude_unset=True)
        new_attributes = fields.pop("attributes", None)

        if "name" in fields:
            fields["name"] = (fields["name"] or "").strip()
            if not fields["name"]:
                raise ValidationError("Component name is required")
        for key in ("type", "criticality"):
            if key in fields:
                if fields[key] is None:
                    raise ValidationError(f"Component {key} cannot be empty")
                fields[key] = _enum_value(fields[key])
        if "sfi_code" in fields:
            fields["sfi_code"] = normalize_sfi_code(fields["sfi_code"])
        if new_attributes is not None:
            self._check_attributes(data.attributes)

        with self.storage.transaction():
            self._require(component_id)

            parent_id = fields.get("parent_id")
            if parent_id is not None:
                if parent_id == component_id:
                    raise Conflict("A component cannot be its own parent")
                if not self.exists(parent_id):
                    raise NotFound(f"Parent component {parent_id} not found")
                rows = self.storage.query_many(select(components.c.id, components.c.parent_id))
                if parent_id in descendant_ids(rows, component_id):
                    raise Conflict("Cannot move a component below one of its own descendants")

            if fields:
                self.storage.execute(
                    update(components).where(components.c.id == component_id).values(**fields)
                )
            if new_attributes is not None:
                self.storage.execute(delete(attributes).where(attributes.c.component_id == component_id))
                self._insert_attributes(component_id, data.attributes)

    def delete(self, component_id: int) -> None:
        """Delete a leaf component that no maintenance task or history entry references."""
        with self.storage.transaction():
            self._require(component_id)
            if self.storage.query_one(select(components.c.id).where(components.c.parent_id == component_id)):
                raise Conflict("Cannot delete component with children")
            if self.storage.query_one(select(tasks.c.id).where(tasks.c.component_id == component_id)):
                raise Conflict("Cannot delete component with maintenance tasks")
            if self.storage.query_one(select(history.c.id).where(history.c.component_id == component_id)):
                raise Conflict("Cannot delete component with maintenance history")

            self.storage.execute(delete(attributes).where(attributes.c.component_id == component_id))
            self.storage.execute(delete(components).where(components.c.id == component_id))
        log.info(f"Deleted component {component_id}")

    def record_running_hours(self, component_id: int, running_hours: float) -> dict:
        """Store a new running-hours reading. Readings never go backwards."""
        if running_hours is None or running_hours < 0:
            raise ValidationError("Running hours must be a non-negative number")
        with self.storage.transaction():
            current = self._require(component_id)["running_hours"] or 0
            if running_hours < current:
                raise ValidationError(
                    f"Running hours cannot decrease (current {current}, reading {running_hours})"
                )
            self.storage.execute(
                update(components).where(components.c.id == component_id).values(running_hours=running_hours)
            )
        return {"previous": current, "running_hours": running_hours}

    # -------------- Reads --------------

    def list(
        self,
        parent_id: Optional[int] = None,
        roots_only: bool = False,
        sfi_code: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[dict]:
        stmt = select(components)
        if parent_id is not None:
            stmt = stmt.where(components.c.parent_id == parent_id)
        elif roots_only:
            stmt = stmt.where(components.c.parent_id.is_(None))
        if sfi_code:
            stmt = stmt.where(components.c.sfi_code.startswith(sfi_code.strip(), autoescape=True))
        if search:
            stmt = stmt.where(components.c.name.icontains(search, autoescape=True))
        return sorted(self.storage.query_many(stmt), key=sibling_key)

    def get_tree(self) -> List[dict]:
        return build_tree(self.storage.query_many(select(*_TREE_COLUMNS)))

    def get_details(self, component_id: int) -> dict:
        component = self._require(component_id)
        component["attributes"] = self.storage.query_many(
            select(attributes.c.name, attributes.c.value)
            .where(attributes.c.component_id == component_id)
            .order_by(attributes.c.id)
        )
        component["parent"] = None
        if component["parent_id"] is not None:
            component["parent"] = self.storage.query_one(
                select(components.c.id, components.c.name, components.c.sfi_code)
                .where(components.c.id == component["parent_id"])
            )
        children = self.storage.query_many(
            select(*_SUMMARY_COLUMNS).where(components.c.parent_id == component_id)
        )
        component["children"] = sorted(children, key=sibling_key)
        return component

    # -------------- SFI catalogue --------------

    def list_sfi_groups(self) -> List[dict]:
        return self.storage.query_many(select(sfi_groups).order_by(sfi_groups.c.code))

    def import_sfi_groups(self) -> dict:
        """Load the standard main groups and common sub-groups once."""
        with self.storage.transaction():
            existing = self.storage.scalar(select(func.count()).select_from(sfi_groups))
            if existing:
                return {"created": 0, "message": "SFI groups already imported"}
            for group in MAIN_GROUPS:
                self.storage.execute(insert(sfi_groups).values(level=1, **group))
            for group in SUB_GROUPS:
                self.storage.execute(insert(sfi_groups).values(
                    level=2, parent_code=parent_code(group["code"]), description="", **group,
                ))
        created = len(MAIN_GROUPS) + len(SUB_GROUPS)
        log.info(f"Imported {created} SFI groups")
        return {"created": created, "message": "Successfully imported SFI groups"}
