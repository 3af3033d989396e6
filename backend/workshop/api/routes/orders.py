"""Order API endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.deps import get_current_user_id, get_db
from workshop.api.presenters import order_detail, order_summary
from workshop.core.errors import WorkshopError
from workshop.models.schemas import MessageResponse, OrderCreate, OrderCreated, OrderDetail, OrderSummary
from workshop.services import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderCreated)
def create_order(
    request: OrderCreate,
    session: Session = Depends(get_db),
    advisor_id: int = Depends(get_current_user_id),
) -> OrderCreated:
    """
    Create a service order together with its initial jobs.
    """
    try:
        order = OrderService(session).create_order(request, advisor_id)
        return OrderCreated(
            message="Order created",
            order_number=order.order_number,
            order_id=order.id,
            total_jobs=order.total_jobs,
        )
    except WorkshopError:
        raise
    except Exception:
        logger.exception(
            "Error creating order for customer %s, vehicle %s", request.customer_id, request.vehicle_id
        )
        raise HTTPException(status_code=500, detail="Could not create the order")


@router.get("/by-advisor/{order_type_id}", response_model=List[OrderSummary])
def list_orders_for_advisor(
    order_type_id: int,
    session: Session = Depends(get_db),
    advisor_id: int = Depends(get_current_user_id),
) -> List[OrderSummary]:
    """
    Open orders of a type created by the acting advisor.
    """
    try:
        orders = OrderService(session).list_open_orders(order_type_id, advisor_id=advisor_id)
        return [order_summary(order) for order in orders]
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing orders of type %s for advisor %s", order_type_id, advisor_id)
        raise HTTPException(status_code=500, detail="Could not list orders")


@router.get("/by-foreman/{order_type_id}", response_model=List[OrderSummary])
def list_orders_for_foreman(order_type_id: int, session: Session = Depends(get_db)) -> List[OrderSummary]:
    """
    Every open order of a type, for the shop floor.
    """
    try:
        orders = OrderService(session).list_open_orders(order_type_id)
        return [order_summary(order) for order in orders]
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error listing orders of type %s", order_type_id)
        raise HTTPException(status_code=500, detail="Could not list orders")


@router.get("/{order_id}", response_model=OrderDetail)
def get_order(order_id: int, session: Session = Depends(get_db)) -> OrderDetail:
    """
    Full detail of an active order with its jobs, customer, vehicle and advisor.
    """
    try:
        return order_detail(OrderService(session).get_order(order_id))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error loading order %s", order_id)
        raise HTTPException(status_code=500, detail="Could not load the order")


@router.put("/{order_id}/cancel", response_model=MessageResponse)
def cancel_order(order_id: int, session: Session = Depends(get_db)) -> MessageResponse:
    """
    Cancel an order; jobs still Pending are cancelled with it.
    """
    try:
        order = OrderService(session).cancel_order(order_id)
        return MessageResponse(message=f"Order {order.order_number} cancelled")
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error cancelling order %s", order_id)
        raise HTTPException(status_code=500, detail="Could not cancel the order")


@router.put("/{order_id}/deliver", response_model=MessageResponse)
def deliver_order(order_id: int, session: Session = Depends(get_db)) -> MessageResponse:
    """
    Hand the vehicle back; every active job must be completed.
    """
    try:
        order = OrderService(session).deliver_order(order_id)
        return MessageResponse(message=f"Order {order.order_number} delivered")
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error delivering order %s", order_id)
        raise HTTPException(status_code=500, detail="Could not deliver the order")
