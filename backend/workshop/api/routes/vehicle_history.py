"""Vehicle history API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.deps import get_db
from workshop.core.errors import WorkshopError
from workshop.models.orders import ORDER_STATUS_NAMES, ORDER_TYPE_NAMES, OrderStatus, OrderType
from workshop.models.schemas import HistoryEntry, ServiceHistoryEntry, VehicleHistory, VehicleServiceHistory
from workshop.services import HistoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicle-history", tags=["vehicle-history"])


def _type_name(order_type_id: int) -> str:
    try:
        return ORDER_TYPE_NAMES[OrderType(order_type_id)]
    except ValueError:
        return "Other"


@router.get("/{vehicle_id}", response_model=VehicleHistory)
def vehicle_history(vehicle_id: int, session: Session = Depends(get_db)) -> VehicleHistory:
    """
    Every order of the vehicle in the history window, newest first.
    """
    try:
        orders = HistoryService(session).orders_for_vehicle(vehicle_id)
        history = [
            HistoryEntry(
                order_id=order.id,
                order_number=order.order_number,
                order_date=order.created_at,
                order_type=_type_name(order.order_type_id),
                status=ORDER_STATUS_NAMES[OrderStatus(order.status)],
                odometer=order.current_odometer,
                advisor_comments=order.advisor_comments or "",
            )
            for order in orders
        ]
        message = f"{len(history)} order(s) found" if history else "No history for this vehicle"
        return VehicleHistory(message=message, history=history)
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading history of vehicle %s", vehicle_id)
        raise HTTPException(status_code=500, detail="Could not load the vehicle history")


@router.get("/{vehicle_id}/services", response_model=VehicleServiceHistory)
def vehicle_service_history(vehicle_id: int, session: Session = Depends(get_db)) -> VehicleServiceHistory:
    """
    Delivered service orders of the vehicle, with the most recent one summarized.
    """
    try:
        orders = HistoryService(session).services_for_vehicle(vehicle_id)
        history = [
            ServiceHistoryEntry(
                order_number=order.order_number,
                service_date=order.created_at,
                service_type=order.service_type.name if order.service_type else "Service",
                odometer=order.current_odometer,
                advisor_comments=order.advisor_comments or "",
            )
            for order in orders
        ]
        if not history:
            return VehicleServiceHistory(message="No services recorded for this vehicle")

        last = history[0]
        return VehicleServiceHistory(
            message=f"{len(history)} service(s) found",
            history=history,
            last_service=last.service_type,
            last_odometer=last.odometer,
            last_service_date=last.service_date,
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading service history of vehicle %s", vehicle_id)
        raise HTTPException(status_code=500, detail="Could not load the service history")
