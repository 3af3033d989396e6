"""Unified search: dispatches a free-text query by its shape."""

import logging
import re
from typing import List

from sqlalchemy import func
from sqlmodel import Session, select

from workshop.core.errors import NotFoundError
from workshop.models.domain import Customer, Vehicle
from workshop.models.orders import Order
from workshop.models.schemas import SearchResponse, SearchResult

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
RESULTS_PER_CATEGORY = 10
VIN_SUFFIX_LENGTH = 4
ORDER_NUMBER_PATTERN = re.compile(r"^[A-Z]{3}-\d+$")
LETTER_PATTERN = re.compile(r"[^\W\d_]")


def looks_like_order_number(query: str) -> bool:
    return bool(ORDER_NUMBER_PATTERN.match(query.upper()))


def looks_like_vin_suffix(query: str) -> bool:
    return len(query) == VIN_SUFFIX_LENGTH and query.isalnum()


def contains_letter(query: str) -> bool:
    return bool(LETTER_PATTERN.search(query))


class SearchService:
    def __init__(self, session: Session):
        self.session = session

    def search(self, query: str) -> SearchResponse:
        """Search orders, vehicles and customers, concatenating every category that matches."""
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return SearchResponse(
                success=False,
                message=f"Enter at least {MIN_QUERY_LENGTH} characters to search",
                query=query,
            )

        results: List[SearchResult] = []
        if looks_like_order_number(query):
            results.extend(self._search_orders(query))
        if looks_like_vin_suffix(query):
            results.extend(self._search_vehicles(query))
        if contains_letter(query):
            results.extend(self._search_customers(query))

        logger.debug("Search %r returned %d result(s)", query, len(results))
        if not results:
            return SearchResponse(success=False, message=f"No results found for '{query}'", query=query)
        return SearchResponse(
            success=True,
            message=f"{len(results)} result(s) found",
            query=query,
            results=results,
            total=len(results),
        )

    def find_order(self, order_number: str) -> Order:
        order = self.session.exec(
            select(Order).where(
                Order.order_number == order_number.strip().upper(),
                Order.active == True,  # noqa: E712
            )
        ).first()
        if order is None:
            raise NotFoundError(f"Order {order_number} not found")
        return order

    def _search_orders(self, query: str) -> List[SearchResult]:
        orders = self.session.exec(
            select(Order)
            .where(
                func.upper(Order.order_number).contains(query.upper()),
                Order.active == True,  # noqa: E712
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(RESULTS_PER_CATEGORY)
        ).all()
        return [
            SearchResult(
                id=order.id,
                kind="order",
                title=order.order_number,
                subtitle=order.customer.full_name if order.customer else "",
                detail=order.vehicle.display_name if order.vehicle else "",
            )
            for order in orders
        ]

    def _search_vehicles(self, query: str) -> List[SearchResult]:
        vehicles = self.session.exec(
            select(Vehicle)
            .where(
                func.upper(Vehicle.vin).endswith(query.upper()),
                Vehicle.active == True,  # noqa: E712
            )
            .order_by(Vehicle.make, Vehicle.model)
            .limit(RESULTS_PER_CATEGORY)
        ).all()
        return [
            SearchResult(
                id=vehicle.id,
                kind="vehicle",
                title=vehicle.display_name,
                subtitle=vehicle.vin,
                detail=vehicle.plates or "",
            )
            for vehicle in vehicles
        ]

    def _search_customers(self, query: str) -> List[SearchResult]:
        customers = self.session.exec(
            select(Customer)
            .where(
                Customer.full_name.ilike(f"%{query}%"),
                Customer.active == True,  # noqa: E712
            )
            .order_by(Customer.full_name)
            .limit(RESULTS_PER_CATEGORY)
        ).all()
        return [
            SearchResult(
                id=customer.id,
                kind="customer",
                title=customer.full_name,
                subtitle=customer.mobile_phone,
                detail=customer.email or "",
            )
            for customer in customers
        ]
