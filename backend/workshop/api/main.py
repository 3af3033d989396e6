from fastapi import APIRouter

from workshop.api.routes import (
    catalog,
    checklist,
    evidence,
    inventory,
    jobs,
    orders,
    parts_on_job,
    search,
    vehicle_history,
)
from workshop.core.config import settings

api_router = APIRouter()


# Health check endpoint
@api_router.get("/health-check/", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.PROJECT_NAME}


# Include all API routes
api_router.include_router(orders.router)
api_router.include_router(jobs.router)
api_router.include_router(checklist.router)
api_router.include_router(parts_on_job.router)
api_router.include_router(evidence.router)
api_router.include_router(inventory.router)
api_router.include_router(search.router)
api_router.include_router(vehicle_history.router)
api_router.include_router(catalog.customers_router)
api_router.include_router(catalog.vehicles_router)
api_router.include_router(catalog.users_router)
api_router.include_router(catalog.service_types_router)
