from sqlmodel import Session, create_engine, select

from workshop.core.config import settings
from workshop.models.domain import Role, RoleId, ServiceType

_uri = str(settings.SQLALCHEMY_DATABASE_URI)
_connect_args = {"check_same_thread": False} if _uri.startswith("sqlite") else {}

engine = create_engine(_uri, pool_pre_ping=True, connect_args=_connect_args)


ROLE_NAMES = {
    RoleId.ADMIN: ("Administrador", "Full access to the workshop backend"),
    RoleId.ADVISOR: ("Asesor", "Creates orders on behalf of customers"),
    RoleId.FOREMAN: ("Jefe de Taller", "Assigns technicians to jobs"),
    RoleId.WAREHOUSE: ("Almacen", "Manages the parts inventory"),
    RoleId.TECHNICIAN: ("Tecnico", "Executes jobs"),
}


def init_db(session: Session) -> None:
    """Seed the role catalog.

    Tables are created by Alembic migrations; this only makes sure the fixed
    role ids the services check against exist, so it is safe to run twice.
    """
    for role_id, (name, description) in ROLE_NAMES.items():
        if session.get(Role, int(role_id)) is None:
            session.add(Role(id=int(role_id), name=name, description=description))

    if session.exec(select(ServiceType)).first() is None:
        session.add(ServiceType(name="Servicio de mantenimiento", description="Mantenimiento preventivo"))

    session.commit()
