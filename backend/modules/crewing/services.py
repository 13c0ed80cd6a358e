"""
crewing/services.py: Crew members and their documents.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import delete, insert, select, update

from core.db import Storage
from core.errors import NotFound, ValidationError
from core.time_utils import utcnow
from modules.crewing.models import crew_table as crew, documents_table as documents
from modules.crewing.schemas import CrewDocumentIn, CrewMemberCreate, CrewMemberUpdate

log = logging.getLogger("shipmaint.crewing")


class CrewService:
    def __init__(self, storage: Storage, clock=utcnow):
        self.storage = storage
        self.clock = clock

    def _require(self, member_id: int) -> dict:
        member = self.storage.query_one(select(crew).where(crew.c.id == member_id))
        if not member:
            raise NotFound(f"Crew member {member_id} not found")
        return member

    @staticmethod
    def _check_documents(docs: List[CrewDocumentIn]) -> None:
        for doc in docs:
            if not doc.name.strip() or not doc.document_number.strip():
                raise ValidationError("Document name and number are required")
            if doc.expiry_date < doc.issued_date:
                raise ValidationError(f"Document {doc.document_number} expires before it was issued")

    def _insert_documents(self, member_id: int, docs: List[CrewDocumentIn]) -> None:
        for doc in docs:
            self.storage.execute(insert(documents).values(crew_member_id=member_id, **doc.model_dump()))

    def list(self, position: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
        stmt = select(crew).order_by(crew.c.position, crew.c.name)
        if position:
            stmt = stmt.where(crew.c.position == position)
        if search:
            stmt = stmt.where(crew.c.name.icontains(search, autoescape=True))
        return self.storage.query_many(stmt)

    def positions(self) -> List[str]:
        rows = self.storage.query_many(
            select(crew.c.position).where(crew.c.position.is_not(None)).distinct().order_by(crew.c.position)
        )
        return [row["position"] for row in rows]

    def get(self, member_id: int) -> dict:
        member = self._require(member_id)
        member["documents"] = self.storage.query_many(
            select(documents).where(documents.c.crew_member_id == member_id).order_by(documents.c.expiry_date)
        )
        return member

    def create(self, data: CrewMemberCreate) -> int:
        if not data.name.strip():
            raise ValidationError("name is required")
        self._check_documents(data.documents)
        with self.storage.transaction():
            result = self.storage.execute(insert(crew).values(
                name=data.name.strip(),
                dob=data.dob,
                country=data.country,
                position=data.position,
                role=data.role or "crew",
            ))
            self._insert_documents(result.inserted_id, data.documents)
        return result.inserted_id

    def update(self, member_id: int, data: CrewMemberUpdate) -> None:
        """Update provided fields; a provided document list replaces all documents."""
        fields = data.model_dump(exclude_unset=True)
        fields.pop("documents", None)
        for key in ("name", "role"):
            if key in fields:
                fields[key] = (fields[key] or "").strip()
                if not fields[key]:
                    raise ValidationError(f"{key} cannot be empty")
        if data.documents is not None:
            self._check_documents(data.documents)

        with self.storage.transaction():
            self._require(member_id)
            if fields:
                self.storage.execute(update(crew).where(crew.c.id == member_id).values(**fields))
            if data.documents is not None:
                self.storage.execute(delete(documents).where(documents.c.crew_member_id == member_id))
                self._insert_documents(member_id, data.documents)

    def delete(self, member_id: int) -> None:
        with self.storage.transaction():
            self._require(member_id)
            self.storage.execute(delete(documents).where(documents.c.crew_member_id == member_id))
            self.storage.execute(delete(crew).where(crew.c.id == member_id))
        log.info(f"Deleted crew member {member_id}")

    def expiring_documents(self, days: int = 30) -> List[dict]:
        """Documents expiring between today and today + days, soonest first."""
        if days < 0:
            raise ValidationError("days must not be negative")
        today = self.clock().date()
        return self.storage.query_many(
            select(documents, crew.c.name.label("crew_name"), crew.c.position)
            .select_from(documents.join(crew, documents.c.crew_member_id == crew.c.id))
            .where(documents.c.expiry_date.between(today, today + timedelta(days=days)))
            .order_by(documents.c.expiry_date, documents.c.id)
        )
