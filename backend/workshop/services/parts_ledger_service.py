"""Parts consumed by jobs, rolled up into job and order totals."""

import logging
from decimal import Decimal
from typing import List, Sequence, Tuple

from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError
from workshop.models.orders import Job, JobStatus, Order, PartLine
from workshop.models.schemas import PartLineInput
from workshop.services.order_service import OrderService

logger = logging.getLogger(__name__)

LOCKED_JOB_STATUSES = (JobStatus.COMPLETED, JobStatus.CANCELLED)


def lines_total(lines: Sequence[PartLine]) -> Decimal:
    return sum((line.total for line in lines), Decimal("0.00"))


class PartsLedgerService:
    """Service for the per-job parts ledger.

    ``Job.parts_total`` is always rewritten from the live lines in the same
    transaction as the mutation, followed by an order recompute.
    """

    def __init__(self, session: Session):
        self.session = session
        self.order_service = OrderService(session)

    def add_lines(self, job_id: int, lines: List[PartLineInput]) -> Tuple[Job, List[PartLine]]:
        job = self.session.get(Job, job_id)
        if job is None or not job.active:
            raise NotFoundError("Job not found")
        if job.status in LOCKED_JOB_STATUSES:
            raise ConflictError("Cannot add parts to a completed or cancelled job")

        try:
            created = []
            for item in lines:
                line = PartLine(
                    job_id=job.id,
                    order_id=job.order_id,
                    part_name=item.part_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                self.session.add(line)
                created.append(line)
            self.session.flush()

            self._refresh_job_total(job)
            self.order_service.recompute_progress(job.order_id)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        for line in created:
            self.session.refresh(line)
        self.session.refresh(job)
        logger.info("Added %d part line(s) to job %s, parts total %s", len(created), job.id, job.parts_total)
        return job, created

    def list_by_job(self, job_id: int) -> Tuple[Job, Sequence[PartLine]]:
        job = self.session.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job not found")
        return job, self._lines_for_job(job_id)

    def list_by_order(self, order_id: int) -> Tuple[Order, Sequence[PartLine]]:
        order = self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        lines = self.session.exec(
            select(PartLine).where(PartLine.order_id == order_id).order_by(PartLine.job_id, PartLine.created_at)
        ).all()
        return order, lines

    def delete_line(self, line_id: int) -> Job:
        line = self.session.get(PartLine, line_id)
        if line is None:
            raise NotFoundError("Part line not found")
        job = self.session.get(Job, line.job_id)
        if job.status == JobStatus.COMPLETED:
            raise ConflictError("Cannot remove parts from a completed job")

        try:
            self.session.delete(line)
            self.session.flush()
            self._refresh_job_total(job)
            self.order_service.recompute_progress(job.order_id)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(job)
        logger.info("Part line %s removed from job %s, parts total %s", line_id, job.id, job.parts_total)
        return job

    def _lines_for_job(self, job_id: int) -> Sequence[PartLine]:
        return self.session.exec(
            select(PartLine).where(PartLine.job_id == job_id).order_by(PartLine.created_at, PartLine.id)
        ).all()

    def _refresh_job_total(self, job: Job) -> None:
        job.parts_total = lines_total(self._lines_for_job(job.id))
        self.session.add(job)
