"""Component registry routes: tree, details, CRUD, running hours, SFI groups."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.db import Storage
from core.dependencies import get_storage
from modules.components.schemas import ComponentCreate, ComponentUpdate, RunningHoursReading
from modules.components.services import ComponentRegistry

router = APIRouter()


def get_registry(storage: Storage = Depends(get_storage)) -> ComponentRegistry:
    return ComponentRegistry(storage)


@router.get("/components", tags=["Components"])
def list_components(
    parent_id: Optional[int] = None,
    roots_only: bool = False,
    sfi_code: Optional[str] = Query(None, description="SFI code prefix"),
    search: Optional[str] = None,
    registry: ComponentRegistry = Depends(get_registry),
):
    """Flat component list with optional filters."""
    return registry.list(parent_id=parent_id, roots_only=roots_only, sfi_code=sfi_code, search=search)


@router.get("/components/tree", tags=["Components"])
def component_tree(registry: ComponentRegistry = Depends(get_registry)):
    """Full hierarchy, roots first, siblings ordered by SFI code then name."""
    return registry.get_tree()


@router.get("/components/{component_id}", tags=["Components"])
def get_component(component_id: int, registry: ComponentRegistry = Depends(get_registry)):
    return registry.get_details(component_id)


@router.post("/components", tags=["Components"])
def create_component(data: ComponentCreate, registry: ComponentRegistry = Depends(get_registry)):
    component_id = registry.insert(data)
    return {"success": True, "id": component_id}


@router.put("/components/{component_id}", tags=["Components"])
def update_component(component_id: int, data: ComponentUpdate,
                     registry: ComponentRegistry = Depends(get_registry)):
    registry.update(component_id, data)
    return {"success": True}


@router.delete("/components/{component_id}", tags=["Components"])
def delete_component(component_id: int, registry: ComponentRegistry = Depends(get_registry)):
    registry.delete(component_id)
    return {"success": True}


@router.post("/components/{component_id}/running-hours", tags=["Components"])
def record_running_hours(component_id: int, data: RunningHoursReading,
                         registry: ComponentRegistry = Depends(get_registry)):
    reading = registry.record_running_hours(component_id, data.running_hours)
    return {"success": True, **reading}


@router.get("/sfi-groups", tags=["Components"])
def list_sfi_groups(registry: ComponentRegistry = Depends(get_registry)):
    return registry.list_sfi_groups()


@router.post("/sfi-groups/import", tags=["Components"])
def import_sfi_groups(registry: ComponentRegistry = Depends(get_registry)):
    result = registry.import_sfi_groups()
    return {"success": True, **result}
