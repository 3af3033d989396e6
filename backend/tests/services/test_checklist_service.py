from decimal import Decimal

import pytest
from sqlmodel import Session, select

from workshop.core.errors import NotFoundError
from workshop.models.orders import Checklist, JobStatus
from workshop.models.schemas import ChecklistSubmission
from workshop.services import ChecklistService

from tests.utils.test_utils import create_test_checklist_request, make_order


class TestChecklistService:
    """Test cases for checklist submission."""

    def test_submit_creates_checklist_and_completes_job(self, db: Session, seed):
        order = make_order(db, seed)
        job = order.jobs[0]

        checklist, created = ChecklistService(db).submit(
            ChecklistSubmission(**create_test_checklist_request(job.id))
        )
        db.refresh(job)
        db.refresh(order)

        assert created is True
        assert checklist.order_id == order.id
        assert checklist.job_description == "Oil change"
        assert checklist.front_tires == "Bueno"
        assert checklist.tire_torque is True
        assert job.status == JobStatus.COMPLETED
        assert job.finished_at is not None
        assert job.technician_comments == "All good"
        assert order.progress == Decimal("50.00")

    def test_resubmit_overwrites_fields(self, db: Session, seed):
        order = make_order(db, seed)
        job_id = order.jobs[0].id
        service = ChecklistService(db)
        service.submit(ChecklistSubmission(**create_test_checklist_request(job_id)))

        checklist, created = service.submit(
            ChecklistSubmission(**create_test_checklist_request(job_id, front_tires="Malo", tire_rotation=True))
        )

        assert created is False
        assert checklist.front_tires == "Malo"
        assert checklist.tire_rotation is True
        assert len(db.exec(select(Checklist)).all()) == 1

    def test_submit_unknown_job(self, db: Session, seed):
        with pytest.raises(NotFoundError):
            ChecklistService(db).submit(ChecklistSubmission(**create_test_checklist_request(999)))

    def test_get_by_job_without_checklist(self, db: Session, seed):
        order = make_order(db, seed)

        with pytest.raises(NotFoundError):
            ChecklistService(db).get_by_job(order.jobs[0].id)
