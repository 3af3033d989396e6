"""Inventory API endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.deps import get_db
from workshop.core.errors import WorkshopError
from workshop.models.schemas import MessageResponse, PartCreate, PartPage, PartRead, PartResponse, QuantityChange
from workshop.services import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("/", response_model=PartPage)
def list_parts(
    page: int = 1,
    per_page: int = 10,
    search: Optional[str] = None,
    session: Session = Depends(get_db),
) -> PartPage:
    """
    Paginated part catalog; ``per_page`` is clamped to 5..50.
    """
    try:
        service = InventoryService(session)
        parts, total_items, page, per_page = service.list_parts(page, per_page, search)
        total_pages = service.total_pages(total_items, per_page)
        return PartPage(
            parts=[PartRead.model_validate(part) for part in parts],
            page=page,
            per_page=per_page,
            total_pages=total_pages,
            total_items=total_items,
            has_previous=page > 1,
            has_next=page < total_pages,
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing parts (page %s, search %r)", page, search)
        raise HTTPException(status_code=500, detail="Could not list parts")


@router.get("/quick-search", response_model=List[PartRead])
def quick_search(term: str = "", session: Session = Depends(get_db)) -> List[PartRead]:
    try:
        return [PartRead.model_validate(part) for part in InventoryService(session).quick_search(term)]
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error in part quick search %r", term)
        raise HTTPException(status_code=500, detail="Could not search parts")


@router.get("/by-number/{part_number}", response_model=PartRead)
def get_part_by_number(part_number: str, session: Session = Depends(get_db)) -> PartRead:
    try:
        return PartRead.model_validate(InventoryService(session).get_by_part_number(part_number))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading part %s", part_number)
        raise HTTPException(status_code=500, detail="Could not load the part")


@router.post("/", response_model=PartResponse)
def create_part(request: PartCreate, session: Session = Depends(get_db)) -> PartResponse:
    try:
        part = InventoryService(session).create_part(request)
        return PartResponse(message="Part created", part=PartRead.model_validate(part))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error creating part %s", request.part_number)
        raise HTTPException(status_code=500, detail="Could not create the part")


@router.put("/{part_id}/increase", response_model=PartResponse)
def increase_quantity(part_id: int, request: QuantityChange, session: Session = Depends(get_db)) -> PartResponse:
    try:
        part = InventoryService(session).increase(part_id, request.amount)
        return PartResponse(message=f"Quantity increased to {part.quantity}", part=PartRead.model_validate(part))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error increasing quantity of part %s", part_id)
        raise HTTPException(status_code=500, detail="Could not update the quantity")


@router.put("/{part_id}/decrease", response_model=PartResponse)
def decrease_quantity(part_id: int, request: QuantityChange, session: Session = Depends(get_db)) -> PartResponse:
    try:
        part = InventoryService(session).decrease(part_id, request.amount)
        return PartResponse(message=f"Quantity decreased to {part.quantity}", part=PartRead.model_validate(part))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error decreasing quantity of part %s", part_id)
        raise HTTPException(status_code=500, detail="Could not update the quantity")


@router.delete("/{part_id}", response_model=MessageResponse)
def delete_part(part_id: int, hard: bool = False, session: Session = Depends(get_db)) -> MessageResponse:
    try:
        InventoryService(session).delete(part_id, hard=hard)
        return MessageResponse(message="Part deleted" if hard else "Part deactivated")
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error deleting part %s", part_id)
        raise HTTPException(status_code=500, detail="Could not delete the part")
