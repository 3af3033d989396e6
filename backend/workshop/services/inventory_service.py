"""Inventory catalog of stocked parts."""

import logging
import math
from datetime import datetime
from typing import Optional, Sequence, Tuple

from sqlalchemy import func, or_
from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError, ValidationError
from workshop.models.domain import Part
from workshop.models.schemas import PartCreate

logger = logging.getLogger(__name__)

MIN_PER_PAGE = 5
MAX_PER_PAGE = 50
QUICK_SEARCH_MIN_LENGTH = 2
QUICK_SEARCH_LIMIT = 15


def clamp_per_page(per_page: int) -> int:
    return max(MIN_PER_PAGE, min(MAX_PER_PAGE, per_page))


class InventoryService:
    def __init__(self, session: Session):
        self.session = session

    def list_parts(
        self, page: int = 1, per_page: int = 10, search: Optional[str] = None
    ) -> Tuple[Sequence[Part], int, int, int]:
        """One page of active parts, newest change first.

        Returns ``(parts, total_items, page, per_page)`` with page and
        per_page normalized.
        """
        page = max(1, page)
        per_page = clamp_per_page(per_page)

        statement = select(Part).where(Part.active == True)  # noqa: E712
        if search and search.strip():
            term = f"%{search.strip().upper()}%"
            statement = statement.where(
                or_(
                    func.upper(Part.part_number).like(term),
                    func.upper(Part.part_type).like(term),
                    func.upper(Part.vehicle_make).like(term),
                    func.upper(Part.vehicle_model).like(term),
                )
            )

        total_items = self.session.exec(
            select(func.count()).select_from(statement.subquery())
        ).one()
        parts = self.session.exec(
            statement.order_by(Part.updated_at.desc(), Part.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        ).all()
        return parts, total_items, page, per_page

    @staticmethod
    def total_pages(total_items: int, per_page: int) -> int:
        return math.ceil(total_items / per_page) if total_items else 0

    def quick_search(self, term: str) -> Sequence[Part]:
        term = (term or "").strip()
        if len(term) < QUICK_SEARCH_MIN_LENGTH:
            return []
        pattern = f"%{term.upper()}%"
        return self.session.exec(
            select(Part)
            .where(
                Part.active == True,  # noqa: E712
                or_(func.upper(Part.part_number).like(pattern), func.upper(Part.part_type).like(pattern)),
            )
            .order_by(Part.part_number)
            .limit(QUICK_SEARCH_LIMIT)
        ).all()

    def get_by_part_number(self, part_number: str) -> Part:
        part = self.session.exec(
            select(Part).where(
                Part.part_number == part_number.strip().upper(),
                Part.active == True,  # noqa: E712
            )
        ).first()
        if part is None:
            raise NotFoundError(f"Part {part_number} not found")
        return part

    def create_part(self, data: PartCreate) -> Part:
        existing = self.session.exec(select(Part).where(Part.part_number == data.part_number)).first()
        if existing is not None:
            raise ConflictError(f"Part number {data.part_number} already exists")

        part = Part.model_validate(data)
        self.session.add(part)
        self.session.commit()
        self.session.refresh(part)
        logger.info("Part %s created with quantity %d", part.part_number, part.quantity)
        return part

    def increase(self, part_id: int, amount: int) -> Part:
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        part = self._get_active(part_id)
        part.quantity += amount
        return self._save_quantity(part, f"+{amount}")

    def decrease(self, part_id: int, amount: int) -> Part:
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        part = self._get_active(part_id)
        if part.quantity < amount:
            raise ConflictError(f"Insufficient stock. Available: {part.quantity}")
        part.quantity -= amount
        return self._save_quantity(part, f"-{amount}")

    def delete(self, part_id: int, hard: bool = False) -> None:
        part = self.session.get(Part, part_id)
        if part is None:
            raise NotFoundError("Part not found")
        if hard:
            self.session.delete(part)
        else:
            part.active = False
            part.updated_at = datetime.utcnow()
            self.session.add(part)
        self.session.commit()
        logger.info("Part %s %s", part_id, "deleted" if hard else "deactivated")

    def _get_active(self, part_id: int) -> Part:
        part = self.session.get(Part, part_id)
        if part is None or not part.active:
            raise NotFoundError("Part not found")
        return part

    def _save_quantity(self, part: Part, change: str) -> Part:
        part.updated_at = datetime.utcnow()
        self.session.add(part)
        self.session.commit()
        self.session.refresh(part)
        logger.info("Part %s quantity %s, now %d", part.part_number, change, part.quantity)
        return part
