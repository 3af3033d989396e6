"""Table models, imported here so ``SQLModel.metadata`` sees every table."""

from .domain import Customer, Part, Role, RoleId, ServiceType, User, Vehicle
from .orders import (
    Checklist,
    Evidence,
    EvidenceCategory,
    Job,
    JobPause,
    JobStatus,
    Order,
    OrderNumberSequence,
    OrderStatus,
    OrderType,
    PartLine,
)
