from decimal import Decimal

import pytest
from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError
from workshop.models.orders import JobStatus, PartLine
from workshop.services import JobService, PartsLedgerService

from tests.utils.test_utils import make_order, part_lines, start_job


class TestPartsLedgerService:
    """Test cases for the per-job parts ledger."""

    def test_add_lines_sums_into_job_and_order(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id

        job, lines = PartsLedgerService(db).add_lines(
            job_id, part_lines(("Oil filter", 1, "150.00"), ("Engine oil 1L", 4, "95.50"))
        )
        db.refresh(order)

        assert len(lines) == 2
        assert job.parts_total == Decimal("532.00")
        assert order.total_cost == Decimal("532.00")
        assert order.progress == Decimal("0.00")

    def test_totals_accumulate_across_batches(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        service = PartsLedgerService(db)
        service.add_lines(job_id, part_lines(("Oil filter", 1, "150.00")))

        job, _ = service.add_lines(job_id, part_lines(("Air filter", 2, "80.00")))

        assert job.parts_total == Decimal("310.00")

    def test_order_cost_spans_jobs(self, db: Session, seed):
        order = make_order(db, seed)
        first, second = (job.id for job in order.jobs)
        service = PartsLedgerService(db)
        service.add_lines(first, part_lines(("Oil filter", 1, "150.00")))
        service.add_lines(second, part_lines(("Brake pads", 1, "600.00")))
        db.refresh(order)

        assert order.total_cost == Decimal("750.00")

    def test_delete_line_recomputes_totals(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        service = PartsLedgerService(db)
        _, lines = service.add_lines(
            job_id, part_lines(("Oil filter", 1, "150.00"), ("Engine oil 1L", 4, "95.50"))
        )

        job = service.delete_line(lines[1].id)
        db.refresh(order)

        assert job.parts_total == Decimal("150.00")
        assert order.total_cost == Decimal("150.00")
        assert job.status == JobStatus.PENDING
        assert order.progress == Decimal("0.00")
        assert len(db.exec(select(PartLine)).all()) == 1

    def test_delete_keeps_progress_of_order(self, db: Session, seed):
        order = make_order(db, seed)
        done, working = (job.id for job in order.jobs)
        start_job(db, seed, done)
        JobService(db).complete(done, seed.technician_id)
        _, lines = PartsLedgerService(db).add_lines(working, part_lines(("Brake pads", 1, "600.00")))

        PartsLedgerService(db).delete_line(lines[0].id)
        db.refresh(order)

        assert order.progress == Decimal("50.00")

    def test_add_to_completed_job_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        start_job(db, seed, job_id)
        JobService(db).complete(job_id, seed.technician_id)

        with pytest.raises(ConflictError):
            PartsLedgerService(db).add_lines(job_id, part_lines(("Oil filter", 1, "150.00")))

    def test_add_to_cancelled_job_is_not_found(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        JobService(db).assign(job_id, seed.technician_id, seed.foreman_id)
        JobService(db).cancel(job_id, seed.foreman_id)

        with pytest.raises(NotFoundError):
            PartsLedgerService(db).add_lines(job_id, part_lines(("Oil filter", 1, "150.00")))

    def test_delete_from_completed_job_is_rejected(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        _, lines = PartsLedgerService(db).add_lines(job_id, part_lines(("Oil filter", 1, "150.00")))
        start_job(db, seed, job_id)
        JobService(db).complete(job_id, seed.technician_id)

        with pytest.raises(ConflictError):
            PartsLedgerService(db).delete_line(lines[0].id)

    def test_delete_unknown_line(self, db: Session, seed):
        with pytest.raises(NotFoundError):
            PartsLedgerService(db).delete_line(999)

    def test_list_by_order(self, db: Session, seed):
        order = make_order(db, seed)
        first, second = (job.id for job in order.jobs)
        service = PartsLedgerService(db)
        service.add_lines(first, part_lines(("Oil filter", 1, "150.00")))
        service.add_lines(second, part_lines(("Brake pads", 2, "300.00")))

        listed_order, lines = service.list_by_order(order.id)

        assert listed_order.order_number == order.order_number
        assert [line.part_name for line in lines] == ["Oil filter", "Brake pads"]
