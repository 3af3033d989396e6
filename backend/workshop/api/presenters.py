"""Build response records from table models."""

from workshop.models.orders import JOB_STATUS_NAMES, ORDER_STATUS_NAMES, Evidence, Job, JobStatus, Order, OrderStatus, PartLine
from workshop.models.schemas import EvidenceRead, JobRead, OrderDetail, OrderLookup, OrderSummary, PartLineRead


def job_read(job: Job) -> JobRead:
    return JobRead(
        id=job.id,
        order_id=job.order_id,
        description=job.description,
        technician_id=job.technician_id,
        technician_name=job.technician.full_name if job.technician else None,
        assigned_at=job.assigned_at,
        started_at=job.started_at,
        finished_at=job.finished_at,
        instructions=job.instructions,
        technician_comments=job.technician_comments,
        foreman_comments=job.foreman_comments,
        status=job.status,
        status_name=JOB_STATUS_NAMES.get(JobStatus(job.status), "Unknown"),
        parts_total=job.parts_total,
        created_at=job.created_at,
    )


def _summary_fields(order: Order) -> dict:
    customer = order.customer
    vehicle = order.vehicle
    jobs = sorted((job for job in order.jobs if job.active), key=lambda job: (job.created_at, job.id))
    return {
        "id": order.id,
        "order_number": order.order_number,
        "order_type_id": order.order_type_id,
        "customer_name": customer.full_name if customer else "",
        "customer_phone": customer.mobile_phone if customer else "",
        "service_type": order.service_type.name if order.service_type else None,
        "vehicle": vehicle.display_name if vehicle else "",
        "vin": vehicle.vin if vehicle else "",
        "plates": (vehicle.plates or "") if vehicle else "",
        "promised_delivery_at": order.promised_delivery_at,
        "status": order.status,
        "total_jobs": order.total_jobs,
        "completed_jobs": order.completed_jobs,
        "progress": order.progress,
        "total_cost": order.total_cost,
        "jobs": [job_read(job) for job in jobs],
    }


def order_summary(order: Order) -> OrderSummary:
    return OrderSummary(**_summary_fields(order))


def order_detail(order: Order) -> OrderDetail:
    return OrderDetail(
        **_summary_fields(order),
        advisor_name=order.advisor.full_name if order.advisor else "",
        current_odometer=order.current_odometer,
        created_at=order.created_at,
        delivered_at=order.delivered_at,
        advisor_comments=order.advisor_comments,
        has_evidence=order.has_evidence,
    )


def order_lookup(order: Order) -> OrderLookup:
    return OrderLookup(
        id=order.id,
        order_number=order.order_number,
        customer_name=order.customer.full_name if order.customer else "",
        vehicle=order.vehicle.display_name if order.vehicle else "",
        created_at=order.created_at,
        status=order.status,
        status_name=ORDER_STATUS_NAMES.get(OrderStatus(order.status), "Unknown"),
    )


def part_line_read(line: PartLine) -> PartLineRead:
    return PartLineRead(
        id=line.id,
        job_id=line.job_id,
        order_id=line.order_id,
        part_name=line.part_name,
        quantity=line.quantity,
        unit_price=line.unit_price,
        total=line.total,
    )


def evidence_read(evidence: Evidence) -> EvidenceRead:
    return EvidenceRead.model_validate(evidence)
