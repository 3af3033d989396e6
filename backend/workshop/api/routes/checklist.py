"""Checklist API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.deps import get_db
from workshop.core.errors import WorkshopError
from workshop.models.schemas import ChecklistRead, ChecklistResponse, ChecklistSubmission
from workshop.services import ChecklistService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checklist", tags=["checklist"])


@router.post("/", response_model=ChecklistResponse)
def submit_checklist(request: ChecklistSubmission, session: Session = Depends(get_db)) -> ChecklistResponse:
    """
    Record the inspection checklist of a job and mark the job completed.
    """
    try:
        checklist, created = ChecklistService(session).submit(request)
        message = "Checklist saved and job completed" if created else "Checklist updated and job completed"
        return ChecklistResponse(message=message, checklist=ChecklistRead.model_validate(checklist))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error saving checklist for job %s", request.job_id)
        raise HTTPException(status_code=500, detail="Could not save the checklist")


@router.get("/by-job/{job_id}", response_model=ChecklistResponse)
def get_checklist(job_id: int, session: Session = Depends(get_db)) -> ChecklistResponse:
    try:
        checklist = ChecklistService(session).get_by_job(job_id)
        return ChecklistResponse(message="Checklist found", checklist=ChecklistRead.model_validate(checklist))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading checklist for job %s", job_id)
        raise HTTPException(status_code=500, detail="Could not load the checklist")
