"""Parts-on-job ledger API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.presenters import part_line_read
from workshop.api.deps import get_db
from workshop.core.errors import WorkshopError
from workshop.models.schemas import MessageResponse, PartLinesAdded, PartLinesCreate, PartLinesListing
from workshop.services import PartsLedgerService
from workshop.services.parts_ledger_service import lines_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parts-on-job", tags=["parts-on-job"])


@router.post("/", response_model=PartLinesAdded)
def add_part_lines(request: PartLinesCreate, session: Session = Depends(get_db)) -> PartLinesAdded:
    """
    Add one or more part lines to a job and refresh the job and order totals.
    """
    try:
        job, lines = PartsLedgerService(session).add_lines(request.job_id, request.lines)
        return PartLinesAdded(
            message=f"{len(lines)} part line(s) added",
            lines=[part_line_read(line) for line in lines],
            lines_total=lines_total(lines),
            line_count=len(lines),
            job_parts_total=job.parts_total,
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error adding part lines to job %s", request.job_id)
        raise HTTPException(status_code=500, detail="Could not add the parts")


@router.get("/by-job/{job_id}", response_model=PartLinesListing)
def list_part_lines_for_job(job_id: int, session: Session = Depends(get_db)) -> PartLinesListing:
    try:
        job, lines = PartsLedgerService(session).list_by_job(job_id)
        return PartLinesListing(
            message=f"{len(lines)} part line(s)",
            job_id=job.id,
            order_number=job.order.order_number if job.order else "",
            lines=[part_line_read(line) for line in lines],
            total=lines_total(lines),
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing part lines of job %s", job_id)
        raise HTTPException(status_code=500, detail="Could not list the parts")


@router.get("/by-order/{order_id}", response_model=PartLinesListing)
def list_part_lines_for_order(order_id: int, session: Session = Depends(get_db)) -> PartLinesListing:
    try:
        order, lines = PartsLedgerService(session).list_by_order(order_id)
        return PartLinesListing(
            message=f"{len(lines)} part line(s)",
            order_number=order.order_number,
            lines=[part_line_read(line) for line in lines],
            total=lines_total(lines),
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing part lines of order %s", order_id)
        raise HTTPException(status_code=500, detail="Could not list the parts")


@router.delete("/{line_id}", response_model=MessageResponse)
def delete_part_line(line_id: int, session: Session = Depends(get_db)) -> MessageResponse:
    try:
        job = PartsLedgerService(session).delete_line(line_id)
        return MessageResponse(message=f"Part line removed, job parts total {job.parts_total}")
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error removing part line %s", line_id)
        raise HTTPException(status_code=500, detail="Could not remove the part line")
