"""Crewing routes: crew list, positions, documents and expiry report."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.config import Settings
from core.db import Storage
from core.dependencies import get_settings, get_storage
from modules.crewing.schemas import CrewMemberCreate, CrewMemberUpdate
from modules.crewing.services import CrewService

router = APIRouter()


def get_crew_service(storage: Storage = Depends(get_storage)) -> CrewService:
    return CrewService(storage)


@router.get("/crew", tags=["Crewing"])
def list_crew(position: Optional[str] = None, search: Optional[str] = None,
              service: CrewService = Depends(get_crew_service)):
    return service.list(position=position, search=search)


@router.get("/crew/positions", tags=["Crewing"])
def crew_positions(service: CrewService = Depends(get_crew_service)):
    return service.positions()


@router.get("/crew/expiring-documents", tags=["Crewing"])
def expiring_documents(
    days: Optional[int] = Query(None, ge=0, le=3650),
    service: CrewService = Depends(get_crew_service),
    settings: Settings = Depends(get_settings),
):
    """Documents expiring within `days` (defaults to the configured window)."""
    return service.expiring_documents(days if days is not None else settings.expiring_documents_days)


@router.get("/crew/{member_id}", tags=["Crewing"])
def get_crew_member(member_id: int, service: CrewService = Depends(get_crew_service)):
    return service.get(member_id)


@router.post("/crew", tags=["Crewing"])
def create_crew_member(data: CrewMemberCreate, service: CrewService = Depends(get_crew_service)):
    member_id = service.create(data)
    return {"success": True, "id": member_id}


@router.put("/crew/{member_id}", tags=["Crewing"])
def update_crew_member(member_id: int, data: CrewMemberUpdate, service: CrewService = Depends(get_crew_service)):
    service.update(member_id, data)
    return {"success": True}


@router.delete("/crew/{member_id}", tags=["Crewing"])
def delete_crew_member(member_id: int, service: CrewService = Depends(get_crew_service)):
    service.delete(member_id)
    return {"success": True}
