"""Search API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from workshop.api.deps import get_db
from workshop.api.presenters import order_lookup
from workshop.core.errors import WorkshopError
from workshop.models.schemas import OrderLookupResponse, SearchResponse
from workshop.services import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/", response_model=SearchResponse)
def search(query: str = "", session: Session = Depends(get_db)) -> SearchResponse:
    """
    Search orders, vehicles and customers by the shape of the query.

    ``SRV-000123`` looks up orders, four alphanumerics match a VIN suffix and
    anything with letters matches customer names.
    """
    try:
        return SearchService(session).search(query)
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error searching for %r", query)
        raise HTTPException(status_code=500, detail="Could not run the search")


@router.get("/orders/{order_number}", response_model=OrderLookupResponse)
def find_order(order_number: str, session: Session = Depends(get_db)) -> OrderLookupResponse:
    try:
        order = SearchService(session).find_order(order_number)
        return OrderLookupResponse(message="Order found", order=order_lookup(order))
    except WorkshopError:
        raise
    except Exception:
        logger.exception("Error looking up order %s", order_number)
        raise HTTPException(status_code=500, detail="Could not look up the order")
