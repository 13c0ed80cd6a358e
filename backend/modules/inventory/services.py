"""
inventory/services.py: Spare-parts stock.

Stock only changes through adjust_stock, which writes the new level and a
movement row together and never lets stock drop below zero.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update

from core.db import Storage
from core.errors import Conflict, NotFound, ValidationError
from modules.inventory.models import movements_table as movements, parts_table as parts
from modules.inventory.schemas import PartCreate, PartUpdate

log = logging.getLogger("shipmaint.inventory")


class PartService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def _require(self, part_id: int) -> dict:
        part = self.storage.query_one(select(parts).where(parts.c.id == part_id))
        if not part:
            raise NotFound(f"Part {part_id} not found")
        return part

    def _check_part_number_free(self, part_number: str, exclude_id: int = None) -> None:
        stmt = select(parts.c.id).where(parts.c.part_number == part_number)
        if exclude_id is not None:
            stmt = stmt.where(parts.c.id != exclude_id)
        if self.storage.query_one(stmt):
            raise Conflict("Part number already exists")

    def list(self, search: Optional[str] = None, low_stock: bool = False) -> List[dict]:
        stmt = select(parts).order_by(parts.c.name)
        if search:
            stmt = stmt.where(
                parts.c.name.icontains(search, autoescape=True)
                | parts.c.part_number.icontains(search, autoescape=True)
            )
        if low_stock:
            stmt = stmt.where(parts.c.stock < parts.c.min_stock)
        return self.storage.query_many(stmt)

    def get(self, part_id: int) -> dict:
        part = self._require(part_id)
        part["movements"] = self.storage.query_many(
            select(movements).where(movements.c.part_id == part_id).order_by(movements.c.id.desc())
        )
        return part

    def create(self, data: PartCreate) -> int:
        for field in ("name", "part_number"):
            if not getattr(data, field).strip():
                raise ValidationError(f"{field} is required")
        with self.storage.transaction():
            self._check_part_number_free(data.part_number.strip())
            result = self.storage.execute(insert(parts).values(
                name=data.name.strip(),
                part_number=data.part_number.strip(),
                manufacturer=data.manufacturer,
                model=data.model,
                stock=data.stock,
                min_stock=data.min_stock,
                location=data.location,
                technical_specs=data.technical_specs,
            ))
        return result.inserted_id

    def update(self, part_id: int, data: PartUpdate) -> None:
        fields = data.model_dump(exclude_unset=True)
        for key in ("name", "part_number"):
            if key in fields:
                fields[key] = (fields[key] or "").strip()
                if not fields[key]:
                    raise ValidationError(f"{key} cannot be empty")
        if "min_stock" in fields and fields["min_stock"] is None:
            fields["min_stock"] = 0

        with self.storage.transaction():
            self._require(part_id)
            if "part_number" in fields:
                self._check_part_number_free(fields["part_number"], exclude_id=part_id)
            if fields:
                self.storage.execute(update(parts).where(parts.c.id == part_id).values(**fields))

    def delete(self, part_id: int) -> None:
        with self.storage.transaction():
            self._require(part_id)
            self.storage.execute(delete(movements).where(movements.c.part_id == part_id))
            self.storage.execute(delete(parts).where(parts.c.id == part_id))

    def adjust_stock(self, part_id: int, quantity: int, notes: Optional[str] = None) -> dict:
        """Apply a signed stock delta and log the movement."""
        if quantity == 0:
            raise ValidationError("Adjustment quantity cannot be zero")
        with self.storage.transaction():
            part = self._require(part_id)
            new_stock = part["stock"] + quantity
            if new_stock < 0:
                raise ValidationError("Cannot reduce stock below zero")
            self.storage.execute(update(parts).where(parts.c.id == part_id).values(stock=new_stock))
            self.storage.execute(insert(movements).values(
                part_id=part_id,
                quantity=quantity,
                previous_stock=part["stock"],
                new_stock=new_stock,
                notes=notes,
            ))

        below = new_stock < part["min_stock"]
        if below:
            log.warning(f"Part {part['part_number']} below minimum stock ({new_stock} < {part['min_stock']})")
        return {"new_stock": new_stock, "below_minimum": below}

    def low_stock(self) -> List[dict]:
        """Parts under their minimum, largest shortfall first."""
        return self.storage.query_many(
            select(parts)
            .where(parts.c.stock < parts.c.min_stock)
            .order_by((parts.c.min_stock - parts.c.stock).desc(), parts.c.name)
        )
