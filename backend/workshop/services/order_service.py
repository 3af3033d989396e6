"""Order lifecycle: creation with numbering, progress, delivery, cancellation."""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from workshop.models.domain import Customer, ServiceType, User, Vehicle
from workshop.models.orders import (
    OPEN_ORDER_STATUSES,
    Job,
    JobStatus,
    Order,
    OrderNumberSequence,
    OrderStatus,
    order_prefix,
)
from workshop.models.schemas import OrderCreate

logger = logging.getLogger(__name__)

ORDER_NUMBER_DIGITS = 6
MAX_NUMBERING_ATTEMPTS = 3
NUMBERING_CONSTRAINTS = (
    "ix_orders_order_number",
    "order_number_sequences_pkey",
    "orders.order_number",
    "order_number_sequences.prefix",
)
CENT = Decimal("0.01")


def compute_progress(completed: int, total: int) -> Decimal:
    """Percentage of completed jobs, rounded to two decimals."""
    if completed == 0 or total == 0:
        return Decimal("0.00")
    return (Decimal(completed) / Decimal(total) * 100).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_order_suffix(order_number: str) -> int:
    """Numeric part of ``PPP-NNNNNN``; 0 when it does not parse."""
    parts = order_number.split("-", 1)
    if len(parts) < 2:
        return 0
    try:
        return int(parts[1])
    except ValueError:
        return 0


def format_order_number(prefix: str, value: int) -> str:
    return f"{prefix}-{value:0{ORDER_NUMBER_DIGITS}d}"


def is_numbering_collision(exc: IntegrityError) -> bool:
    """True when the violated constraint is the order number or its sequence row.

    PostgreSQL reports the constraint name; SQLite only names ``table.column``.
    """
    diag = getattr(exc.orig, "diag", None)
    source = getattr(diag, "constraint_name", None) or str(exc.orig)
    return any(marker in source for marker in NUMBERING_CONSTRAINTS)


class OrderService:
    """Service for service orders and their aggregate progress."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------ creation

    def create_order(self, data: OrderCreate, advisor_id: int) -> Order:
        """Create an order and its jobs in one transaction.

        The order number is claimed in the same transaction, so a failure
        anywhere leaves neither the order, its jobs nor the number behind.
        """
        if not data.jobs:
            raise ValidationError("An order needs at least one job")

        advisor = self.session.get(User, advisor_id)
        if advisor is None or not advisor.active:
            raise UnauthorizedError("Unknown or inactive advisor")

        customer = self.session.get(Customer, data.customer_id)
        if customer is None or not customer.active:
            raise NotFoundError("Customer not found")

        vehicle = self.session.get(Vehicle, data.vehicle_id)
        if vehicle is None or not vehicle.active:
            raise NotFoundError("Vehicle not found")
        if vehicle.customer_id != customer.id:
            raise ValidationError("Vehicle does not belong to the customer")

        if data.service_type_id is not None and self.session.get(ServiceType, data.service_type_id) is None:
            raise NotFoundError("Service type not found")

        prefix = order_prefix(data.order_type_id)
        for attempt in range(1, MAX_NUMBERING_ATTEMPTS + 1):
            try:
                order = self._insert_order(data, advisor_id, prefix)
                self.session.commit()
                break
            except IntegrityError as exc:
                self.session.rollback()
                if not is_numbering_collision(exc):
                    logger.error("Could not create order for prefix %s: %s", prefix, exc.orig)
                    raise
                if attempt == MAX_NUMBERING_ATTEMPTS:
                    logger.error("Could not allocate an order number for prefix %s", prefix)
                    raise
                logger.warning("Order number collision for prefix %s, retrying (%d)", prefix, attempt)
            except Exception:
                self.session.rollback()
                raise

        self.session.refresh(order)
        logger.info("Order %s created with %d jobs", order.order_number, order.total_jobs)
        return order

    def _insert_order(self, data: OrderCreate, advisor_id: int, prefix: str) -> Order:
        order = Order(
            order_number=self._next_order_number(prefix),
            order_type_id=data.order_type_id,
            customer_id=data.customer_id,
            vehicle_id=data.vehicle_id,
            advisor_id=advisor_id,
            service_type_id=data.service_type_id,
            current_odometer=data.current_odometer,
            promised_delivery_at=data.promised_delivery_at,
            advisor_comments=data.advisor_comments,
            status=OrderStatus.PENDING,
            total_jobs=len(data.jobs),
            completed_jobs=0,
            progress=Decimal("0.00"),
            total_cost=Decimal("0.00"),
        )
        self.session.add(order)
        self.session.flush()

        for item in data.jobs:
            instructions = item.instructions if item.instructions and item.instructions.strip() else None
            self.session.add(
                Job(
                    order_id=order.id,
                    description=item.description,
                    instructions=instructions,
                    status=JobStatus.PENDING,
                )
            )
        self.session.flush()
        return order

    def _next_order_number(self, prefix: str) -> str:
        sequence = self.session.exec(
            select(OrderNumberSequence)
            .where(OrderNumberSequence.prefix == prefix)
            .with_for_update()
        ).first()
        if sequence is None:
            sequence = OrderNumberSequence(prefix=prefix, last_value=0)

        existing = self.session.exec(
            select(Order.order_number).where(Order.order_number.startswith(f"{prefix}-"))
        ).all()
        highest = max((parse_order_suffix(number) for number in existing), default=0)

        sequence.last_value = max(sequence.last_value, highest) + 1
        self.session.add(sequence)
        return format_order_number(prefix, sequence.last_value)

    # ------------------------------------------------------------ queries

    def get_order(self, order_id: int) -> Order:
        order = self.session.get(Order, order_id)
        if order is None or not order.active:
            raise NotFoundError("Order not found")
        return order

    def list_open_orders(self, order_type_id: int, advisor_id: Optional[int] = None) -> Sequence[Order]:
        """Active Pending/InProcess/Finished orders of a type, soonest promise first."""
        statement = select(Order).where(
            Order.order_type_id == order_type_id,
            Order.active == True,  # noqa: E712
            Order.status.in_([int(s) for s in OPEN_ORDER_STATUSES]),
        )
        if advisor_id is not None:
            statement = statement.where(Order.advisor_id == advisor_id)
        return self.session.exec(statement.order_by(Order.promised_delivery_at)).all()

    def active_jobs(self, order_id: int) -> List[Job]:
        return list(
            self.session.exec(
                select(Job)
                .where(Job.order_id == order_id, Job.active == True)  # noqa: E712
                .order_by(Job.created_at, Job.id)
            ).all()
        )

    # ------------------------------------------------------------ lifecycle

    def recompute_progress(self, order_id: int) -> Order:
        """Refresh the denormalized counts, progress and cost of an order.

        Does not commit; callers run it inside their own transaction.
        """
        order = self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        jobs = self.active_jobs(order_id)
        total = len(jobs)
        completed = sum(1 for job in jobs if job.status == JobStatus.COMPLETED)

        order.total_jobs = total
        order.completed_jobs = completed
        order.progress = compute_progress(completed, total)
        order.total_cost = sum((Decimal(job.parts_total or 0) for job in jobs), Decimal("0.00"))

        if total and completed == total:
            if order.status in (OrderStatus.PENDING, OrderStatus.IN_PROCESS):
                order.status = OrderStatus.FINISHED
                order.finished_at = datetime.utcnow()
        elif order.status == OrderStatus.FINISHED:
            order.status = OrderStatus.IN_PROCESS
            order.finished_at = None

        self.session.add(order)
        return order

    def mark_process_started(self, order_id: int) -> None:
        order = self.session.get(Order, order_id)
        if order is not None and order.status == OrderStatus.PENDING:
            order.status = OrderStatus.IN_PROCESS
            order.process_started_at = datetime.utcnow()
            self.session.add(order)

    def cancel_order(self, order_id: int) -> Order:
        """Cancel the order and every job of it that is still Pending."""
        order = self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        order.status = OrderStatus.CANCELLED
        order.active = False
        self.session.add(order)

        pending_jobs = self.session.exec(
            select(Job).where(
                Job.order_id == order_id,
                Job.active == True,  # noqa: E712
                Job.status == JobStatus.PENDING,
            )
        ).all()
        for job in pending_jobs:
            job.status = JobStatus.CANCELLED
            job.active = False
            self.session.add(job)

        self.session.commit()
        self.session.refresh(order)
        logger.info("Order %s cancelled (%d pending jobs cancelled)", order.order_number, len(pending_jobs))
        return order

    def deliver_order(self, order_id: int) -> Order:
        """Deliver the order; every active job must be Completed."""
        order = self.session.get(Order, order_id)
        if order is None or not order.active:
            raise NotFoundError("Order not found")
        if order.status == OrderStatus.DELIVERED:
            raise ConflictError("Order was already delivered")

        outstanding = sum(1 for job in self.active_jobs(order_id) if job.status != JobStatus.COMPLETED)
        if outstanding:
            raise ConflictError(f"Cannot deliver the order: {outstanding} job(s) not completed")

        order.status = OrderStatus.DELIVERED
        order.delivered_at = datetime.utcnow()
        self.session.add(order)
        self.session.commit()
        self.session.refresh(order)
        logger.info("Order %s delivered", order.order_number)
        return order
