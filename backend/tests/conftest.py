import os
from collections.abc import Generator
from types import SimpleNamespace

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine, SQLModel
from sqlalchemy.pool import StaticPool

from workshop import models  # noqa: F401
from workshop.api.deps import get_db, get_evidence_storage
from workshop.core.db import init_db
from workshop.main import app
from workshop.models.domain import Customer, RoleId, User, Vehicle
from workshop.storage import LocalEvidenceStorage


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh in-memory database and session for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        init_db(session)
        yield session

    SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def seed(db: Session) -> SimpleNamespace:
    """Staff of every role, one customer and one vehicle."""
    advisor = User(full_name="Ana Asesora", username="ana", role_id=RoleId.ADVISOR)
    foreman = User(full_name="Fernando Jefe", username="fernando", role_id=RoleId.FOREMAN)
    technician = User(full_name="Tomas Tecnico", username="tomas", role_id=RoleId.TECHNICIAN)
    other_technician = User(full_name="Teresa Tecnica", username="teresa", role_id=RoleId.TECHNICIAN)
    inactive_technician = User(full_name="Ivan Inactivo", username="ivan", role_id=RoleId.TECHNICIAN, active=False)
    warehouse = User(full_name="Alma Almacen", username="alma", role_id=RoleId.WAREHOUSE)
    customer = Customer(
        full_name="Juan Perez",
        tax_id="PEJJ800101AAA",
        mobile_phone="5551234567",
        email="juan@example.com",
    )
    db.add_all([advisor, foreman, technician, other_technician, inactive_technician, warehouse, customer])
    db.commit()

    vehicle = Vehicle(
        customer_id=customer.id,
        vin="1HGCM82633A004352",
        make="Honda",
        model="Accord",
        color="Gris",
        year=2019,
        plates="ABC-123",
    )
    db.add(vehicle)
    db.commit()

    return SimpleNamespace(
        advisor_id=advisor.id,
        foreman_id=foreman.id,
        technician_id=technician.id,
        other_technician_id=other_technician.id,
        inactive_technician_id=inactive_technician.id,
        warehouse_id=warehouse.id,
        customer_id=customer.id,
        vehicle_id=vehicle.id,
    )


@pytest.fixture(scope="function")
def evidence_storage(tmp_path) -> LocalEvidenceStorage:
    return LocalEvidenceStorage(tmp_path / "evidence")


@pytest.fixture(scope="function")
def client(db: Session, evidence_storage: LocalEvidenceStorage) -> Generator[TestClient, None, None]:
    """Create a test client bound to the test session and evidence directory."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_evidence_storage] = lambda: evidence_storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
