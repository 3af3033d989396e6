"""Customers, vehicles, staff and service types."""

import logging
from typing import Optional, Sequence

from sqlmodel import Session, select

from workshop.core.errors import ConflictError, NotFoundError, ValidationError
from workshop.models.domain import Customer, Role, ServiceType, User, Vehicle
from workshop.models.schemas import CustomerCreate, ServiceTypeCreate, UserCreate, VehicleCreate

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, session: Session):
        self.session = session

    # Customers

    def create_customer(self, data: CustomerCreate) -> Customer:
        customer = Customer.model_validate(data)
        self.session.add(customer)
        self.session.commit()
        self.session.refresh(customer)
        logger.info("Customer %s created", customer.id)
        return customer

    def list_customers(self) -> Sequence[Customer]:
        return self.session.exec(
            select(Customer).where(Customer.active == True).order_by(Customer.full_name)  # noqa: E712
        ).all()

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.session.get(Customer, customer_id)
        if customer is None or not customer.active:
            raise NotFoundError("Customer not found")
        return customer

    # Vehicles

    def create_vehicle(self, data: VehicleCreate) -> Vehicle:
        self.get_customer(data.customer_id)
        vin = data.vin.strip().upper()
        if self.session.exec(select(Vehicle).where(Vehicle.vin == vin)).first() is not None:
            raise ConflictError(f"A vehicle with VIN {vin} already exists")

        vehicle = Vehicle.model_validate(data, update={"vin": vin})
        self.session.add(vehicle)
        self.session.commit()
        self.session.refresh(vehicle)
        logger.info("Vehicle %s (%s) registered for customer %s", vehicle.id, vin, data.customer_id)
        return vehicle

    def get_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = self.session.get(Vehicle, vehicle_id)
        if vehicle is None or not vehicle.active:
            raise NotFoundError("Vehicle not found")
        return vehicle

    def list_vehicles_for_customer(self, customer_id: int) -> Sequence[Vehicle]:
        self.get_customer(customer_id)
        return self.session.exec(
            select(Vehicle)
            .where(Vehicle.customer_id == customer_id, Vehicle.active == True)  # noqa: E712
            .order_by(Vehicle.id)
        ).all()

    # Users

    def create_user(self, data: UserCreate) -> User:
        if self.session.get(Role, data.role_id) is None:
            raise ValidationError("Unknown role")
        if self.session.exec(select(User).where(User.username == data.username)).first() is not None:
            raise ConflictError(f"Username {data.username} is already taken")

        user = User.model_validate(data)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("User %s created with role %s", user.username, user.role_id)
        return user

    def list_users(self, role_id: Optional[int] = None) -> Sequence[User]:
        statement = select(User).where(User.active == True)  # noqa: E712
        if role_id is not None:
            statement = statement.where(User.role_id == role_id)
        return self.session.exec(statement.order_by(User.full_name)).all()

    # Service types

    def create_service_type(self, data: ServiceTypeCreate) -> ServiceType:
        service_type = ServiceType.model_validate(data)
        self.session.add(service_type)
        self.session.commit()
        self.session.refresh(service_type)
        return service_type

    def list_service_types(self) -> Sequence[ServiceType]:
        return self.session.exec(
            select(ServiceType).where(ServiceType.active == True).order_by(ServiceType.name)  # noqa: E712
        ).all()
