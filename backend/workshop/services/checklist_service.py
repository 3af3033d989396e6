"""Checklist recording; submitting a checklist also completes its job."""

import logging
from datetime import datetime
from typing import Tuple

from sqlmodel import Session, select

from workshop.core.errors import NotFoundError
from workshop.models.orders import CHECKLIST_FIELDS, Checklist, JobStatus
from workshop.models.schemas import ChecklistSubmission
from workshop.services.job_service import JobService
from workshop.services.order_service import OrderService

logger = logging.getLogger(__name__)


class ChecklistService:
    def __init__(self, session: Session):
        self.session = session
        self.job_service = JobService(session)
        self.order_service = OrderService(session)

    def submit(self, data: ChecklistSubmission) -> Tuple[Checklist, bool]:
        """Create or overwrite the checklist of a job and mark the job Completed.

        Returns the checklist and whether it was newly created.
        """
        job = self.job_service.get_job(data.job_id)

        checklist = self.session.exec(select(Checklist).where(Checklist.job_id == job.id)).first()
        created = checklist is None
        if created:
            checklist = Checklist(
                job_id=job.id,
                order_id=job.order_id,
                job_description=data.job_description or job.description,
            )
        elif data.job_description:
            checklist.job_description = data.job_description

        for name in CHECKLIST_FIELDS:
            setattr(checklist, name, getattr(data, name))
        checklist.updated_at = datetime.utcnow()
        self.session.add(checklist)

        job.technician_comments = data.technician_comments
        job.status = JobStatus.COMPLETED
        job.finished_at = datetime.utcnow()
        self.session.add(job)
        self.session.flush()

        self.order_service.recompute_progress(job.order_id)
        self.session.commit()
        self.session.refresh(checklist)
        logger.info("Checklist %s for job %s (%s)", checklist.id, job.id, "created" if created else "updated")
        return checklist, created

    def get_by_job(self, job_id: int) -> Checklist:
        checklist = self.session.exec(select(Checklist).where(Checklist.job_id == job_id)).first()
        if checklist is None:
            raise NotFoundError("No checklist recorded for this job")
        return checklist
