from decimal import Decimal

import pytest
from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from workshop.models.orders import JobPause, JobStatus, OrderStatus
from workshop.models.schemas import JobCreate
from workshop.services import JobService, OrderService

from tests.utils.test_utils import make_order, start_job


class TestJobAssignment:
    """Test cases for foreman assignment."""

    def test_assign_pending_job(self, db: Session, seed):
        order = make_order(db, seed)
        job = JobService(db).assign(order.jobs[0].id, seed.technician_id, seed.foreman_id, "Use synthetic oil")

        assert job.status == JobStatus.ASSIGNED
        assert job.technician_id == seed.technician_id
        assert job.assigned_at is not None
        assert job.foreman_comments == "Use synthetic oil"

    def test_assign_twice_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        service = JobService(db)
        service.assign(order.jobs[0].id, seed.technician_id, seed.foreman_id)

        with pytest.raises(ConflictError):
            service.assign(order.jobs[0].id, seed.other_technician_id, seed.foreman_id)

    def test_assign_requires_foreman(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(UnauthorizedError):
            JobService(db).assign(order.jobs[0].id, seed.technician_id, seed.advisor_id)

    def test_assign_rejects_non_technician(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(ValidationError):
            JobService(db).assign(order.jobs[0].id, seed.warehouse_id, seed.foreman_id)

    def test_assign_rejects_inactive_technician(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(ValidationError):
            JobService(db).assign(order.jobs[0].id, seed.inactive_technician_id, seed.foreman_id)

    def test_assign_unknown_job(self, db: Session, seed):
        with pytest.raises(NotFoundError):
            JobService(db).assign(999, seed.technician_id, seed.foreman_id)

    def test_reassign_assigned_job(self, db: Session, seed):
        order = make_order(db, seed)
        service = JobService(db)
        job_id = order.jobs[0].id
        service.assign(job_id, seed.technician_id, seed.foreman_id)

        job = service.reassign(job_id, seed.other_technician_id, seed.foreman_id)

        assert job.technician_id == seed.other_technician_id
        assert job.status == JobStatus.ASSIGNED
        assert job.started_at is None

    def test_reassign_to_same_technician_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        service = JobService(db)
        job_id = order.jobs[0].id
        service.assign(job_id, seed.technician_id, seed.foreman_id)

        with pytest.raises(ConflictError):
            service.reassign(job_id, seed.technician_id, seed.foreman_id)

    def test_reassign_without_technician_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(ConflictError):
            JobService(db).reassign(order.jobs[0].id, seed.technician_id, seed.foreman_id)

    def test_reassign_in_process_job_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)

        with pytest.raises(ConflictError):
            JobService(db).reassign(job_id, seed.other_technician_id, seed.foreman_id)


class TestJobExecution:
    """Test cases for the technician workflow."""

    def test_start_assigned_job(self, db: Session, seed):
        order = make_order(db, seed)
        job = start_job(db, seed, order.jobs[0].id)

        assert job.status == JobStatus.IN_PROCESS
        assert job.started_at is not None

    def test_start_twice_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)

        with pytest.raises(ConflictError, match="already started"):
            JobService(db).start(job_id, seed.technician_id)

    def test_start_by_other_technician_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        JobService(db).assign(job_id, seed.technician_id, seed.foreman_id)

        with pytest.raises(UnauthorizedError):
            JobService(db).start(job_id, seed.other_technician_id)

        assert JobService(db).get_job(job_id).status == JobStatus.ASSIGNED

    def test_start_unassigned_job_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(UnauthorizedError):
            JobService(db).start(order.jobs[0].id, seed.technician_id)

    def test_complete_requires_in_process(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        JobService(db).assign(job_id, seed.technician_id, seed.foreman_id)

        with pytest.raises(ConflictError):
            JobService(db).complete(job_id, seed.technician_id)

    def test_complete_by_other_technician_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)

        with pytest.raises(UnauthorizedError):
            JobService(db).complete(job_id, seed.other_technician_id)

    def test_complete_stores_comments(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)

        job = JobService(db).complete(job_id, seed.technician_id, "Replaced filter")

        assert job.status == JobStatus.COMPLETED
        assert job.finished_at is not None
        assert job.technician_comments == "Replaced filter"

    def test_technician_queue_orders_by_status(self, db: Session, seed):
        order = make_order(db, seed, jobs=["Oil change", "Brake check", "Alignment"])
        service = JobService(db)
        first, second, third = (job.id for job in order.jobs)
        start_job(db, seed, first)
        service.assign(second, seed.technician_id, seed.foreman_id)
        service.assign(third, seed.other_technician_id, seed.foreman_id)

        queue = service.technician_queue(seed.technician_id)
        assert [job.id for job in queue] == [second, first]

        in_process = service.technician_queue(seed.technician_id, JobStatus.IN_PROCESS)
        assert [job.id for job in in_process] == [first]

    def test_technician_queue_skips_cancelled_orders(self, db: Session, seed):
        order = make_order(db, seed)
        first, second = (job.id for job in order.jobs)
        start_job(db, seed, first)
        JobService(db).assign(second, seed.technician_id, seed.foreman_id)

        OrderService(db).cancel_order(order.id)

        assert JobService(db).technician_queue(seed.technician_id) == []


class TestPauseResumeCancel:
    """Test cases for pauses and foreman cancellation."""

    def test_pause_and_resume_started_job(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)
        service = JobService(db)

        paused = service.pause(job_id, seed.technician_id, "Waiting for parts")
        assert paused.status == JobStatus.PAUSED

        resumed = service.resume(job_id, seed.technician_id)
        assert resumed.status == JobStatus.IN_PROCESS

        pauses = service.pauses(job_id)
        assert len(pauses) == 1
        assert pauses[0].reason == "Waiting for parts"
        assert pauses[0].resumed_at is not None

    def test_resume_unstarted_job_returns_to_assigned(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        service = JobService(db)
        service.assign(job_id, seed.technician_id, seed.foreman_id)
        service.pause(job_id, seed.technician_id, "Bay occupied")

        assert service.resume(job_id, seed.technician_id).status == JobStatus.ASSIGNED

    def test_pause_pending_job_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(UnauthorizedError):
            JobService(db).pause(order.jobs[0].id, seed.technician_id, "No reason")

    def test_paused_job_cannot_start(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)
        JobService(db).pause(job_id, seed.technician_id, "Lunch")

        with pytest.raises(ConflictError):
            JobService(db).start(job_id, seed.technician_id)

    def test_resume_when_not_paused_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)

        with pytest.raises(ConflictError):
            JobService(db).resume(job_id, seed.technician_id)
        assert db.exec(select(JobPause)).all() == []

    def test_cancel_job_recomputes_order(self, db: Session, seed):
        order = make_order(db, seed)
        done, dropped = (job.id for job in order.jobs)
        start_job(db, seed, done)
        JobService(db).complete(done, seed.technician_id)
        JobService(db).assign(dropped, seed.technician_id, seed.foreman_id)

        job = JobService(db).cancel(dropped, seed.foreman_id)
        db.refresh(order)

        assert job.status == JobStatus.CANCELLED
        assert job.active is False
        assert order.total_jobs == 1
        assert order.progress == Decimal("100.00")
        assert order.status == OrderStatus.FINISHED

    def test_cancel_pending_job_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(ConflictError):
            JobService(db).cancel(order.jobs[0].id, seed.foreman_id)

    def test_cancel_requires_foreman(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        JobService(db).assign(job_id, seed.technician_id, seed.foreman_id)

        with pytest.raises(UnauthorizedError):
            JobService(db).cancel(job_id, seed.technician_id)


class TestAddJob:
    """Test cases for adding jobs to an existing order."""

    def test_add_job_updates_counts(self, db: Session, seed):
        order = make_order(db, seed)
        job = JobService(db).add_job(order.id, JobCreate(description="Wiper blades"))
        db.refresh(order)

        assert job.status == JobStatus.PENDING
        assert order.total_jobs == 3

    def test_add_job_with_technician(self, db: Session, seed):
        order = make_order(db, seed)
        job = JobService(db).add_job(
            order.id, JobCreate(description="Wiper blades", technician_id=seed.technician_id)
        )

        assert job.status == JobStatus.ASSIGNED
        assert job.technician_id == seed.technician_id

    def test_add_job_to_finished_order_reopens_it(self, db: Session, seed):
        order = make_order(db, seed, jobs=["Oil change"])
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)
        JobService(db).complete(job_id, seed.technician_id)

        JobService(db).add_job(order.id, JobCreate(description="Extra check"))
        db.refresh(order)

        assert order.status == OrderStatus.IN_PROCESS
        assert order.progress == Decimal("50.00")

    def test_add_job_to_delivered_order_is_rejected(self, db: Session, seed):
        order = make_order(db, seed, jobs=["Oil change"])
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)
        JobService(db).complete(job_id, seed.technician_id)
        OrderService(db).deliver_order(order.id)

        with pytest.raises(ConflictError):
            JobService(db).add_job(order.id, JobCreate(description="Too late"))

    def test_add_job_to_cancelled_order_is_not_found(self, db: Session, seed):
        order = make_order(db, seed)
        OrderService(db).cancel_order(order.id)

        with pytest.raises(NotFoundError):
            JobService(db).add_job(order.id, JobCreate(description="Too late"))
