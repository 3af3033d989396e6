"""Request and response records for the REST API."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from workshop.models.orders import ChecklistBase


class MessageResponse(SQLModel):
    success: bool = True
    message: str


# ---------------------------------------------------------------- catalog


class CustomerCreate(SQLModel):
    full_name: str = Field(min_length=1, max_length=250)
    tax_id: str = Field(min_length=1, max_length=20)
    mobile_phone: str = Field(min_length=1, max_length=50)
    home_phone: Optional[str] = None
    email: Optional[str] = None
    street: Optional[str] = None
    exterior_number: Optional[str] = None
    neighborhood: Optional[str] = None
    municipality: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class CustomerRead(CustomerCreate):
    id: int
    active: bool


class VehicleCreate(SQLModel):
    customer_id: int
    vin: str = Field(min_length=1, max_length=50)
    make: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None
    year: Optional[int] = None
    color: Optional[str] = None
    plates: Optional[str] = None
    initial_odometer: int = Field(default=0, ge=0)


class VehicleRead(VehicleCreate):
    id: int
    active: bool


class UserCreate(SQLModel):
    full_name: str = Field(min_length=1, max_length=150)
    username: str = Field(min_length=1, max_length=50)
    role_id: int


class UserRead(UserCreate):
    id: int
    active: bool


class ServiceTypeCreate(SQLModel):
    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    base_price: Decimal = Field(default=Decimal("0.00"), ge=0)


class ServiceTypeRead(ServiceTypeCreate):
    id: int
    active: bool


# ---------------------------------------------------------------- orders


class JobInput(SQLModel):
    description: str = Field(min_length=1)
    instructions: Optional[str] = None


class OrderCreate(SQLModel):
    order_type_id: int
    customer_id: int
    vehicle_id: int
    current_odometer: int = Field(ge=0)
    promised_delivery_at: datetime
    advisor_comments: Optional[str] = None
    service_type_id: Optional[int] = None
    jobs: List[JobInput] = Field(min_length=1)


class OrderCreated(SQLModel):
    success: bool = True
    message: str
    order_number: str
    order_id: int
    total_jobs: int


class JobRead(SQLModel):
    id: int
    order_id: int
    description: str
    technician_id: Optional[int] = None
    technician_name: Optional[str] = None
    assigned_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    instructions: Optional[str] = None
    technician_comments: Optional[str] = None
    foreman_comments: Optional[str] = None
    status: int
    status_name: str
    parts_total: Decimal
    created_at: datetime


class OrderSummary(SQLModel):
    """Order row with its jobs, as listed for advisors and foremen."""

    id: int
    order_number: str
    order_type_id: int
    customer_name: str
    customer_phone: str
    service_type: Optional[str] = None
    vehicle: str
    vin: str
    plates: str
    promised_delivery_at: datetime
    status: int
    total_jobs: int
    completed_jobs: int
    progress: Decimal
    total_cost: Decimal
    jobs: List[JobRead] = Field(default_factory=list)


class OrderDetail(OrderSummary):
    advisor_name: str
    current_odometer: int
    created_at: datetime
    delivered_at: Optional[datetime] = None
    advisor_comments: Optional[str] = None
    has_evidence: bool


class JobCreate(SQLModel):
    description: str = Field(min_length=1)
    instructions: Optional[str] = None
    technician_id: Optional[int] = None


class JobResponse(SQLModel):
    success: bool = True
    message: str
    job: Optional[JobRead] = None


class JobComments(SQLModel):
    comments: Optional[str] = None


class JobPauseRequest(SQLModel):
    reason: str = Field(min_length=1)


# ---------------------------------------------------------------- checklist


class ChecklistSubmission(ChecklistBase):
    job_id: int
    job_description: str = ""
    technician_comments: Optional[str] = None


class ChecklistRead(ChecklistBase):
    id: int
    job_id: int
    order_id: int
    job_description: str


class ChecklistResponse(SQLModel):
    success: bool = True
    message: str
    checklist: Optional[ChecklistRead] = None


# ---------------------------------------------------------------- parts ledger


class PartLineInput(SQLModel):
    part_name: str = Field(min_length=1, max_length=200)
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)


class PartLinesCreate(SQLModel):
    job_id: int
    lines: List[PartLineInput] = Field(min_length=1)


class PartLineRead(SQLModel):
    id: int
    job_id: int
    order_id: int
    part_name: str
    quantity: int
    unit_price: Decimal
    total: Decimal


class PartLinesAdded(SQLModel):
    success: bool = True
    message: str
    lines: List[PartLineRead] = Field(default_factory=list)
    lines_total: Decimal
    line_count: int
    job_parts_total: Decimal


class PartLinesListing(SQLModel):
    success: bool = True
    message: str
    job_id: Optional[int] = None
    order_number: str
    lines: List[PartLineRead] = Field(default_factory=list)
    total: Decimal


# ---------------------------------------------------------------- evidence


class EvidenceRead(SQLModel):
    id: int
    order_id: int
    description: str
    file_path: str
    created_at: datetime
    is_work_evidence: bool


class EvidenceUploaded(SQLModel):
    success: bool = True
    message: str
    count: int
    evidence: List[EvidenceRead] = Field(default_factory=list)


# ---------------------------------------------------------------- inventory


class PartCreate(SQLModel):
    part_number: str = Field(min_length=1, max_length=50)
    part_type: str = Field(min_length=1, max_length=100)
    location: Optional[str] = Field(default=None, max_length=10)
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_year: Optional[int] = None
    quantity: int = Field(default=0, ge=0)

    @field_validator("part_number")
    @classmethod
    def normalize_part_number(cls, value: str) -> str:
        return value.strip().upper()


class PartRead(SQLModel):
    id: int
    part_number: str
    part_type: str
    location: Optional[str] = None
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_year: Optional[int] = None
    quantity: int
    created_at: datetime
    updated_at: datetime


class PartResponse(SQLModel):
    success: bool = True
    message: str
    part: Optional[PartRead] = None


class QuantityChange(SQLModel):
    amount: int


class PartPage(SQLModel):
    success: bool = True
    parts: List[PartRead] = Field(default_factory=list)
    page: int
    per_page: int
    total_pages: int
    total_items: int
    has_previous: bool
    has_next: bool


# ---------------------------------------------------------------- search & history


class SearchResult(SQLModel):
    id: int
    kind: str
    title: str
    subtitle: str
    detail: str


class SearchResponse(SQLModel):
    success: bool
    message: str
    query: str = ""
    results: List[SearchResult] = Field(default_factory=list)
    total: int = 0


class OrderLookup(SQLModel):
    id: int
    order_number: str
    customer_name: str
    vehicle: str
    created_at: datetime
    status: int
    status_name: str


class OrderLookupResponse(SQLModel):
    success: bool = True
    message: str
    order: Optional[OrderLookup] = None


class HistoryEntry(SQLModel):
    order_id: int
    order_number: str
    order_date: datetime
    order_type: str
    status: str
    odometer: int
    advisor_comments: str


class VehicleHistory(SQLModel):
    success: bool = True
    message: str
    history: List[HistoryEntry] = Field(default_factory=list)


class ServiceHistoryEntry(SQLModel):
    order_number: str
    service_date: datetime
    service_type: str
    odometer: int
    advisor_comments: str


class VehicleServiceHistory(SQLModel):
    success: bool = True
    message: str
    history: List[ServiceHistoryEntry] = Field(default_factory=list)
    last_service: Optional[str] = None
    last_odometer: int = 0
    last_service_date: Optional[datetime] = None
