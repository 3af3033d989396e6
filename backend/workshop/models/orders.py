"""Order aggregate models: orders, jobs, part lines, checklists, evidence."""

from datetime import datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import List, Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, Relationship, SQLModel

from workshop.models.domain import Customer, ServiceType, User, Vehicle


class OrderStatus(IntEnum):
    PENDING = 1
    IN_PROCESS = 2
    FINISHED = 3
    DELIVERED = 4
    CANCELLED = 5


OPEN_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.IN_PROCESS, OrderStatus.FINISHED)

ORDER_STATUS_NAMES = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.IN_PROCESS: "In process",
    OrderStatus.FINISHED: "Finished",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


class JobStatus(IntEnum):
    PENDING = 1
    ASSIGNED = 2
    IN_PROCESS = 3
    COMPLETED = 4
    PAUSED = 5
    CANCELLED = 6


JOB_STATUS_NAMES = {
    JobStatus.PENDING: "Pending",
    JobStatus.ASSIGNED: "Assigned",
    JobStatus.IN_PROCESS: "In process",
    JobStatus.COMPLETED: "Completed",
    JobStatus.PAUSED: "Paused",
    JobStatus.CANCELLED: "Cancelled",
}


class OrderType(IntEnum):
    SERVICE = 1
    DIAGNOSIS = 2
    REPAIR = 3
    WARRANTY = 4
    RETURN = 5


ORDER_PREFIXES = {
    OrderType.SERVICE: "SRV",
    OrderType.DIAGNOSIS: "DIA",
    OrderType.REPAIR: "REP",
    OrderType.WARRANTY: "GAR",
    OrderType.RETURN: "RTO",
}
DEFAULT_ORDER_PREFIX = "ORD"

ORDER_TYPE_NAMES = {
    OrderType.SERVICE: "Service",
    OrderType.DIAGNOSIS: "Diagnosis",
    OrderType.REPAIR: "Repair",
    OrderType.WARRANTY: "Warranty",
    OrderType.RETURN: "Return",
}


def order_prefix(order_type_id: int) -> str:
    """Three-letter prefix of an order number for the given order type."""
    try:
        return ORDER_PREFIXES[OrderType(order_type_id)]
    except ValueError:
        return DEFAULT_ORDER_PREFIX


class EvidenceCategory(str, Enum):
    RECEPTION = "reception"
    WORK = "work"


class OrderNumberSequence(SQLModel, table=True):
    """Last order number handed out per prefix; locked while allocating."""

    __tablename__ = "order_number_sequences"

    prefix: str = Field(primary_key=True, max_length=3)
    last_value: int = 0


class Order(SQLModel, table=True):
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_number: str = Field(max_length=50, unique=True, index=True)
    order_type_id: int = Field(index=True)
    customer_id: int = Field(foreign_key="customers.id")
    vehicle_id: int = Field(foreign_key="vehicles.id", index=True)
    advisor_id: int = Field(foreign_key="users.id", index=True)
    service_type_id: Optional[int] = Field(default=None, foreign_key="service_types.id")
    current_odometer: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    promised_delivery_at: datetime
    process_started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    advisor_comments: Optional[str] = Field(default=None, sa_column=Column(Text))
    foreman_comments: Optional[str] = Field(default=None, sa_column=Column(Text))
    total_cost: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    total_jobs: int = 0
    completed_jobs: int = 0
    progress: Decimal = Field(default=Decimal("0.00"), max_digits=5, decimal_places=2)
    status: int = Field(default=OrderStatus.PENDING, index=True)
    active: bool = True
    has_evidence: bool = False

    jobs: List["Job"] = Relationship(back_populates="order", sa_relationship_kwargs={"order_by": "Job.id"})
    customer: Optional[Customer] = Relationship()
    vehicle: Optional[Vehicle] = Relationship()
    advisor: Optional[User] = Relationship()
    service_type: Optional[ServiceType] = Relationship()


class Job(SQLModel, table=True):
    """A unit of work inside an order, executed by one technician."""

    __tablename__ = "jobs"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    description: str = Field(sa_column=Column(Text, nullable=False))
    technician_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    assigned_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    instructions: Optional[str] = Field(default=None, sa_column=Column(Text))
    technician_comments: Optional[str] = Field(default=None, sa_column=Column(Text))
    foreman_comments: Optional[str] = Field(default=None, sa_column=Column(Text))
    status: int = Field(default=JobStatus.PENDING, index=True)
    parts_total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    order: Optional[Order] = Relationship(back_populates="jobs")
    technician: Optional[User] = Relationship()


class JobPause(SQLModel, table=True):
    __tablename__ = "job_pauses"

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", index=True)
    order_id: int = Field(foreign_key="orders.id")
    paused_at: datetime = Field(default_factory=datetime.utcnow)
    resumed_at: Optional[datetime] = None
    reason: str = Field(sa_column=Column(Text, nullable=False))


class PartLine(SQLModel, table=True):
    """A part consumed by a job: quantity times unit price."""

    __tablename__ = "job_part_lines"

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", index=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    part_name: str = Field(max_length=200)
    quantity: int
    unit_price: Decimal = Field(max_digits=12, decimal_places=2)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def total(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_price)


class ChecklistBase(SQLModel):
    """Inspection form fields shared by the table and the submission body."""

    # Steering
    tie_rod_links: str = Field(max_length=15)
    tie_rod_ends: str = Field(max_length=15)
    steering_box: str = Field(max_length=15)
    steering_wheel: str = Field(max_length=15)
    # Suspension
    front_shocks: str = Field(max_length=15)
    rear_shocks: str = Field(max_length=15)
    stabilizer_bar: str = Field(max_length=15)
    control_arms: str = Field(max_length=15)
    # Tires
    front_tires: str = Field(max_length=15)
    rear_tires: str = Field(max_length=15)
    wheel_balancing: str = Field(max_length=15)
    wheel_alignment: str = Field(max_length=15)
    # Lights
    high_beams: str = Field(max_length=15)
    low_beams: str = Field(max_length=15)
    fog_lights: str = Field(max_length=15)
    reverse_lights: str = Field(max_length=15)
    turn_signals: str = Field(max_length=15)
    hazard_lights: str = Field(max_length=15)
    # Brakes
    front_discs_drums: str = Field(max_length=15)
    rear_discs_drums: str = Field(max_length=15)
    front_brake_pads: str = Field(max_length=15)
    rear_brake_pads: str = Field(max_length=15)
    # Replaced parts
    replaced_engine_oil: bool = False
    replaced_oil_filter: bool = False
    replaced_engine_air_filter: bool = False
    replaced_cabin_air_filter: bool = False
    # Fluid levels
    brake_fluid_level: bool = True
    coolant_level: bool = True
    washer_fluid_level: bool = True
    engine_oil_level: bool = True
    # Work performed
    drum_disc_deglazing: bool = True
    brake_adjustment: bool = True
    tire_pressure_calibration: bool = True
    tire_torque: bool = True
    tire_rotation: bool = False


CHECKLIST_FIELDS = tuple(ChecklistBase.model_fields)


class Checklist(ChecklistBase, table=True):
    __tablename__ = "job_checklists"

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", unique=True, index=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    job_description: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Evidence(SQLModel, table=True):
    """Photo attached to an order; the file itself lives in the evidence store."""

    __tablename__ = "order_evidence"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    file_path: str = Field(max_length=500)
    description: str = Field(default="", max_length=255)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    is_work_evidence: bool = False
    active: bool = True
