"""Job lifecycle: assignment, start, completion, pauses and cancellation."""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from workshop.models.domain import RoleId, User
from workshop.models.orders import Job, JobPause, JobStatus, Order, OrderStatus
from workshop.models.schemas import JobCreate
from workshop.services.order_service import OrderService

logger = logging.getLogger(__name__)

REASSIGNABLE_STATUSES = (JobStatus.PENDING, JobStatus.ASSIGNED)
INTERRUPTIBLE_STATUSES = (JobStatus.ASSIGNED, JobStatus.IN_PROCESS)
STARTED_STATUSES = (JobStatus.IN_PROCESS, JobStatus.COMPLETED, JobStatus.PAUSED)


class JobService:
    """Service for the per-job state machine.

    Statuses: Pending(1) -> Assigned(2) -> InProcess(3) -> Completed(4),
    with Paused(5) and Cancelled(6) reachable from Assigned or InProcess.
    """

    def __init__(self, session: Session):
        self.session = session
        self.order_service = OrderService(session)

    # ------------------------------------------------------------ lookups

    def get_job(self, job_id: int) -> Job:
        job = self.session.get(Job, job_id)
        if job is None or not job.active:
            raise NotFoundError("Job not found")
        return job

    def list_for_order(self, order_id: int) -> List[Job]:
        self.order_service.get_order(order_id)
        return self.order_service.active_jobs(order_id)

    def technician_queue(self, technician_id: int, status_filter: Optional[int] = None) -> Sequence[Job]:
        """Active jobs of a technician on active orders, grouped by status then oldest first."""
        statement = (
            select(Job)
            .join(Order, Job.order_id == Order.id)
            .where(
                Job.technician_id == technician_id,
                Job.active == True,  # noqa: E712
                Order.active == True,  # noqa: E712
            )
        )
        if status_filter is not None:
            statement = statement.where(Job.status == status_filter)
        return self.session.exec(statement.order_by(Job.status, Job.created_at)).all()

    # ------------------------------------------------------------ creation

    def add_job(self, order_id: int, data: JobCreate) -> Job:
        """Add a job to an order that is still open."""
        order = self.session.get(Order, order_id)
        if order is None or not order.active:
            raise NotFoundError("Order not found")
        if order.status in (OrderStatus.DELIVERED, OrderStatus.CANCELLED):
            raise ConflictError("Cannot add jobs to a delivered or cancelled order")

        job = Job(
            order_id=order_id,
            description=data.description,
            instructions=data.instructions or None,
            status=JobStatus.PENDING,
        )
        if data.technician_id is not None:
            self._require_technician(data.technician_id)
            job.technician_id = data.technician_id
            job.assigned_at = datetime.utcnow()
            job.status = JobStatus.ASSIGNED

        self.session.add(job)
        self.session.flush()
        self.order_service.recompute_progress(order_id)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s added to order %s", job.id, order.order_number)
        return job

    # ------------------------------------------------------------ foreman

    def assign(self, job_id: int, technician_id: int, foreman_id: int, comments: Optional[str] = None) -> Job:
        self._require_foreman(foreman_id)
        job = self.get_job(job_id)
        if job.technician_id is not None:
            raise ConflictError("Job already has a technician assigned")
        if job.status != JobStatus.PENDING:
            raise ConflictError("Only pending jobs can be assigned")
        self._require_technician(technician_id)

        job.technician_id = technician_id
        job.assigned_at = datetime.utcnow()
        job.status = JobStatus.ASSIGNED
        if comments:
            job.foreman_comments = comments
        self.session.add(job)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s assigned to technician %s by foreman %s", job_id, technician_id, foreman_id)
        return job

    def reassign(self, job_id: int, technician_id: int, foreman_id: int, comments: Optional[str] = None) -> Job:
        self._require_foreman(foreman_id)
        job = self.get_job(job_id)
        if job.technician_id is None:
            raise ConflictError("Job has no technician assigned")
        if job.status not in REASSIGNABLE_STATUSES:
            raise ConflictError("Job can no longer be reassigned")
        if job.technician_id == technician_id:
            raise ConflictError("Job is already assigned to that technician")
        self._require_technician(technician_id)

        previous = job.technician_id
        job.technician_id = technician_id
        job.assigned_at = datetime.utcnow()
        job.status = JobStatus.ASSIGNED
        job.started_at = None
        if comments:
            job.foreman_comments = comments
        self.session.add(job)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s reassigned from technician %s to %s", job_id, previous, technician_id)
        return job

    def cancel(self, job_id: int, foreman_id: int) -> Job:
        self._require_foreman(foreman_id)
        job = self.get_job(job_id)
        if job.status not in INTERRUPTIBLE_STATUSES:
            raise ConflictError("Only assigned or in-process jobs can be cancelled")

        job.status = JobStatus.CANCELLED
        job.active = False
        self.session.add(job)
        self.session.flush()
        self.order_service.recompute_progress(job.order_id)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s cancelled by foreman %s", job_id, foreman_id)
        return job

    # ------------------------------------------------------------ technician

    def start(self, job_id: int, technician_id: int) -> Job:
        job = self._get_job_for_technician(job_id, technician_id)
        if job.status == JobStatus.CANCELLED:
            raise ConflictError("Job is cancelled")
        if job.status in STARTED_STATUSES:
            raise ConflictError("Job already started")
        if job.status != JobStatus.ASSIGNED:
            raise ConflictError("Job is not assigned")

        job.status = JobStatus.IN_PROCESS
        job.started_at = datetime.utcnow()
        self.session.add(job)
        self.order_service.mark_process_started(job.order_id)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s started by technician %s", job_id, technician_id)
        return job

    def complete(self, job_id: int, technician_id: int, comments: Optional[str] = None) -> Job:
        job = self._get_job_for_technician(job_id, technician_id)
        if job.status != JobStatus.IN_PROCESS:
            raise ConflictError("Job is not in process")

        job.status = JobStatus.COMPLETED
        job.finished_at = datetime.utcnow()
        job.technician_comments = comments
        self.session.add(job)
        self.session.flush()
        order = self.order_service.recompute_progress(job.order_id)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s completed, order %s at %s%%", job_id, order.order_number, order.progress)
        return job

    def pause(self, job_id: int, technician_id: int, reason: str) -> Job:
        job = self._get_job_for_technician(job_id, technician_id)
        if job.status not in INTERRUPTIBLE_STATUSES:
            raise ConflictError("Only assigned or in-process jobs can be paused")

        job.status = JobStatus.PAUSED
        self.session.add(job)
        self.session.add(JobPause(job_id=job.id, order_id=job.order_id, reason=reason))
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s paused by technician %s", job_id, technician_id)
        return job

    def resume(self, job_id: int, technician_id: int) -> Job:
        job = self._get_job_for_technician(job_id, technician_id)
        if job.status != JobStatus.PAUSED:
            raise ConflictError("Job is not paused")

        open_pause = self.session.exec(
            select(JobPause)
            .where(JobPause.job_id == job_id, JobPause.resumed_at == None)  # noqa: E711
            .order_by(JobPause.paused_at.desc())
        ).first()
        if open_pause is not None:
            open_pause.resumed_at = datetime.utcnow()
            self.session.add(open_pause)

        job.status = JobStatus.IN_PROCESS if job.started_at else JobStatus.ASSIGNED
        self.session.add(job)
        self.session.commit()
        self.session.refresh(job)
        logger.info("Job %s resumed by technician %s", job_id, technician_id)
        return job

    def pauses(self, job_id: int) -> Sequence[JobPause]:
        return self.session.exec(
            select(JobPause).where(JobPause.job_id == job_id).order_by(JobPause.paused_at)
        ).all()

    # ------------------------------------------------------------ helpers

    def _get_job_for_technician(self, job_id: int, technician_id: int) -> Job:
        job = self.get_job(job_id)
        if job.technician_id != technician_id:
            raise UnauthorizedError("Job is not assigned to this technician")
        return job

    def _require_foreman(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None or not user.active or user.role_id != RoleId.FOREMAN:
            raise UnauthorizedError("Only an active foreman can perform this action")
        return user

    def _require_technician(self, technician_id: int) -> User:
        user = self.session.get(User, technician_id)
        if user is None or not user.active or user.role_id != RoleId.TECHNICIAN:
            raise ValidationError("Technician not found or inactive")
        return user
