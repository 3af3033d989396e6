"""Catalog models: roles, users, customers, vehicles, service types, parts."""

from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Optional

from sqlmodel import Field, SQLModel


class RoleId(IntEnum):
    """Fixed role ids seeded by migration."""

    ADMIN = 1
    ADVISOR = 2
    FOREMAN = 3
    WAREHOUSE = 4
    TECHNICIAN = 5


class Role(SQLModel, table=True):
    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50, unique=True)
    description: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class User(SQLModel, table=True):
    """Workshop staff member (advisor, foreman, technician...)."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=150)
    username: str = Field(max_length=50, unique=True, index=True)
    role_id: int = Field(foreign_key="roles.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_access_at: Optional[datetime] = None
    active: bool = Field(default=True, index=True)


class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=250)
    tax_id: str = Field(max_length=20)
    mobile_phone: str = Field(max_length=50, index=True)
    home_phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=150)
    street: Optional[str] = Field(default=None, max_length=150)
    exterior_number: Optional[str] = Field(default=None, max_length=50)
    neighborhood: Optional[str] = Field(default=None, max_length=150)
    municipality: Optional[str] = Field(default=None, max_length=150)
    state: Optional[str] = Field(default=None, max_length=150)
    country: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    active: bool = True


class Vehicle(SQLModel, table=True):
    """Customer vehicle. The VIN is unique across the whole workshop."""

    __tablename__ = "vehicles"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: int = Field(foreign_key="customers.id", index=True)
    vin: str = Field(max_length=50, unique=True, index=True)
    make: Optional[str] = Field(default=None, max_length=100)
    model: Optional[str] = Field(default=None, max_length=100)
    version: Optional[str] = Field(default=None, max_length=100)
    year: Optional[int] = None
    color: Optional[str] = Field(default=None, max_length=50)
    plates: Optional[str] = Field(default=None, max_length=20)
    initial_odometer: int = 0
    active: bool = True

    @property
    def display_name(self) -> str:
        return f"{self.make or ''} {self.model or ''} {self.color or ''} / {self.year or ''}".strip()


class ServiceType(SQLModel, table=True):
    __tablename__ = "service_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=150)
    description: Optional[str] = Field(default=None, max_length=500)
    base_price: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    active: bool = True


class Part(SQLModel, table=True):
    """Stocked part in the inventory catalog."""

    __tablename__ = "parts"

    id: Optional[int] = Field(default=None, primary_key=True)
    part_number: str = Field(max_length=50, unique=True, index=True)
    part_type: str = Field(max_length=100)
    location: Optional[str] = Field(default=None, max_length=10)
    vehicle_make: Optional[str] = Field(default=None, max_length=50)
    vehicle_model: Optional[str] = Field(default=None, max_length=50)
    vehicle_year: Optional[int] = None
    quantity: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    active: bool = True
