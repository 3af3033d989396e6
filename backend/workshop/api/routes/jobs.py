"""Job API endpoints: foreman assignment and technician workflow."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from workshop.api.deps import get_current_user_id, get_db
from workshop.api.presenters import job_read
from workshop.core.errors import WorkshopError
from workshop.models.schemas import JobComments, JobCreate, JobPauseRequest, JobRead, JobResponse
from workshop.services import JobService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _comments(body: Optional[JobComments]) -> Optional[str]:
    return body.comments if body else None


@router.get("/by-order/{order_id}", response_model=List[JobRead])
def list_jobs_for_order(order_id: int, session: Session = Depends(get_db)) -> List[JobRead]:
    """
    Active jobs of an order in creation order.
    """
    try:
        return [job_read(job) for job in JobService(session).list_for_order(order_id)]
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing jobs of order %s", order_id)
        raise HTTPException(status_code=500, detail="Could not list jobs")


@router.get("/by-technician/{technician_id}", response_model=List[JobRead])
def technician_queue(
    technician_id: int,
    status_filter: Optional[int] = Query(None, alias="statusFilter"),
    session: Session = Depends(get_db),
) -> List[JobRead]:
    """
    Work queue of a technician, optionally restricted to one status.
    """
    try:
        jobs = JobService(session).technician_queue(technician_id, status_filter)
        return [job_read(job) for job in jobs]
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading work queue of technician %s", technician_id)
        raise HTTPException(status_code=500, detail="Could not load the work queue")


@router.get("/{job_id}", response_model=JobRead)
def get_job(job_id: int, session: Session = Depends(get_db)) -> JobRead:
    """
    Single active job.
    """
    try:
        return job_read(JobService(session).get_job(job_id))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading job %s", job_id)
        raise HTTPException(status_code=500, detail="Could not load the job")


@router.post("/{order_id}", response_model=JobResponse)
def add_job(order_id: int, request: JobCreate, session: Session = Depends(get_db)) -> JobResponse:
    """
    Add a job to an open order, optionally assigning a technician right away.
    """
    try:
        job = JobService(session).add_job(order_id, request)
        return JobResponse(message="Job added", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error adding job to order %s", order_id)
        raise HTTPException(status_code=500, detail="Could not add the job")


@router.put("/{job_id}/assign/{technician_id}", response_model=JobResponse)
def assign_job(
    job_id: int,
    technician_id: int,
    body: Optional[JobComments] = None,
    session: Session = Depends(get_db),
    foreman_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Assign a technician to a pending job. Foreman only.
    """
    try:
        job = JobService(session).assign(job_id, technician_id, foreman_id, _comments(body))
        return JobResponse(message="Job assigned", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error assigning job %s to technician %s", job_id, technician_id)
        raise HTTPException(status_code=500, detail="Could not assign the job")


@router.put("/{job_id}/reassign/{technician_id}", response_model=JobResponse)
def reassign_job(
    job_id: int,
    technician_id: int,
    body: Optional[JobComments] = None,
    session: Session = Depends(get_db),
    foreman_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Move a job that has not started to another technician. Foreman only.
    """
    try:
        job = JobService(session).reassign(job_id, technician_id, foreman_id, _comments(body))
        return JobResponse(message="Job reassigned", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error reassigning job %s to technician %s", job_id, technician_id)
        raise HTTPException(status_code=500, detail="Could not reassign the job")


@router.put("/{job_id}/start", response_model=JobResponse)
def start_job(
    job_id: int,
    session: Session = Depends(get_db),
    technician_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Start an assigned job as its technician.
    """
    try:
        job = JobService(session).start(job_id, technician_id)
        return JobResponse(message="Job started", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error starting job %s as technician %s", job_id, technician_id)
        raise HTTPException(status_code=500, detail="Could not start the job")


@router.put("/{job_id}/complete", response_model=JobResponse)
def complete_job(
    job_id: int,
    body: Optional[JobComments] = None,
    session: Session = Depends(get_db),
    technician_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Finish an in-process job and refresh the order progress.
    """
    try:
        job = JobService(session).complete(job_id, technician_id, _comments(body))
        return JobResponse(message="Job completed", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error completing job %s as technician %s", job_id, technician_id)
        raise HTTPException(status_code=500, detail="Could not complete the job")


@router.put("/{job_id}/pause", response_model=JobResponse)
def pause_job(
    job_id: int,
    body: JobPauseRequest,
    session: Session = Depends(get_db),
    technician_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Pause an assigned or in-process job, recording the reason.
    """
    try:
        job = JobService(session).pause(job_id, technician_id, body.reason)
        return JobResponse(message="Job paused", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error pausing job %s", job_id)
        raise HTTPException(status_code=500, detail="Could not pause the job")


@router.put("/{job_id}/resume", response_model=JobResponse)
def resume_job(
    job_id: int,
    session: Session = Depends(get_db),
    technician_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Resume a paused job where it left off.
    """
    try:
        job = JobService(session).resume(job_id, technician_id)
        return JobResponse(message="Job resumed", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error resuming job %s", job_id)
        raise HTTPException(status_code=500, detail="Could not resume the job")


@router.put("/{job_id}/cancel", response_model=JobResponse)
def cancel_job(
    job_id: int,
    session: Session = Depends(get_db),
    foreman_id: int = Depends(get_current_user_id),
) -> JobResponse:
    """
    Cancel an assigned or in-process job. Foreman only.
    """
    try:
        job = JobService(session).cancel(job_id, foreman_id)
        return JobResponse(message="Job cancelled", job=job_read(job))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error cancelling job %s", job_id)
        raise HTTPException(status_code=500, detail="Could not cancel the job")
