"""Catalog API endpoints: customers, vehicles, users and service types."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.deps import get_db
from workshop.core.errors import WorkshopError
from workshop.models.domain import RoleId
from workshop.models.schemas import (
    CustomerCreate,
    CustomerRead,
    ServiceTypeCreate,
    ServiceTypeRead,
    UserCreate,
    UserRead,
    VehicleCreate,
    VehicleRead,
)
from workshop.services import CatalogService

logger = logging.getLogger(__name__)

customers_router = APIRouter(prefix="/customers", tags=["customers"])
vehicles_router = APIRouter(prefix="/vehicles", tags=["vehicles"])
users_router = APIRouter(prefix="/users", tags=["users"])
service_types_router = APIRouter(prefix="/service-types", tags=["service-types"])


# Customers


@customers_router.post("/", response_model=CustomerRead)
def create_customer(request: CustomerCreate, session: Session = Depends(get_db)) -> CustomerRead:
    try:
        return CustomerRead.model_validate(CatalogService(session).create_customer(request))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error creating customer %r", request.full_name)
        raise HTTPException(status_code=500, detail="Could not create the customer")


@customers_router.get("/", response_model=List[CustomerRead])
def list_customers(session: Session = Depends(get_db)) -> List[CustomerRead]:
    return [CustomerRead.model_validate(c) for c in CatalogService(session).list_customers()]


@customers_router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: int, session: Session = Depends(get_db)) -> CustomerRead:
    return CustomerRead.model_validate(CatalogService(session).get_customer(customer_id))


@customers_router.get("/{customer_id}/vehicles", response_model=List[VehicleRead])
def list_customer_vehicles(customer_id: int, session: Session = Depends(get_db)) -> List[VehicleRead]:
    vehicles = CatalogService(session).list_vehicles_for_customer(customer_id)
    return [VehicleRead.model_validate(v) for v in vehicles]


# Vehicles


@vehicles_router.post("/", response_model=VehicleRead)
def create_vehicle(request: VehicleCreate, session: Session = Depends(get_db)) -> VehicleRead:
    try:
        return VehicleRead.model_validate(CatalogService(session).create_vehicle(request))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error registering vehicle %s", request.vin)
        raise HTTPException(status_code=500, detail="Could not register the vehicle")


@vehicles_router.get("/{vehicle_id}", response_model=VehicleRead)
def get_vehicle(vehicle_id: int, session: Session = Depends(get_db)) -> VehicleRead:
    return VehicleRead.model_validate(CatalogService(session).get_vehicle(vehicle_id))


# Users


@users_router.post("/", response_model=UserRead)
def create_user(request: UserCreate, session: Session = Depends(get_db)) -> UserRead:
    try:
        return UserRead.model_validate(CatalogService(session).create_user(request))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error creating user %s", request.username)
        raise HTTPException(status_code=500, detail="Could not create the user")


@users_router.get("/", response_model=List[UserRead])
def list_users(role_id: Optional[int] = None, session: Session = Depends(get_db)) -> List[UserRead]:
    return [UserRead.model_validate(u) for u in CatalogService(session).list_users(role_id)]


@users_router.get("/technicians", response_model=List[UserRead])
def list_technicians(session: Session = Depends(get_db)) -> List[UserRead]:
    return [UserRead.model_validate(u) for u in CatalogService(session).list_users(RoleId.TECHNICIAN)]


# Service types


@service_types_router.post("/", response_model=ServiceTypeRead)
def create_service_type(request: ServiceTypeCreate, session: Session = Depends(get_db)) -> ServiceTypeRead:
    return ServiceTypeRead.model_validate(CatalogService(session).create_service_type(request))


@service_types_router.get("/", response_model=List[ServiceTypeRead])
def list_service_types(session: Session = Depends(get_db)) -> List[ServiceTypeRead]:
    return [ServiceTypeRead.model_validate(s) for s in CatalogService(session).list_service_types()]
