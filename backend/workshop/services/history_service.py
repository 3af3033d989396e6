"""Vehicle order and service history."""

import calendar
from datetime import datetime
from typing import Optional, Sequence

from sqlmodel import Session, select

from workshop.core.config import settings
from workshop.models.orders import Order, OrderStatus, OrderType


def months_ago(moment: datetime, months: int) -> datetime:
    """Same day-of-month ``months`` earlier, clamped to the month's length."""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class HistoryService:
    def __init__(self, session: Session, window_months: Optional[int] = None):
        self.session = session
        self.window_months = window_months if window_months is not None else settings.HISTORY_WINDOW_MONTHS

    def window_start(self, now: Optional[datetime] = None) -> datetime:
        return months_ago(now or datetime.utcnow(), self.window_months)

    def orders_for_vehicle(self, vehicle_id: int) -> Sequence[Order]:
        """Active orders of the vehicle inside the history window, newest first."""
        return self.session.exec(
            select(Order)
            .where(
                Order.vehicle_id == vehicle_id,
                Order.active == True,  # noqa: E712
                Order.created_at >= self.window_start(),
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()

    def services_for_vehicle(self, vehicle_id: int) -> Sequence[Order]:
        """Delivered service orders of the vehicle inside the window, newest first."""
        return self.session.exec(
            select(Order)
            .where(
                Order.vehicle_id == vehicle_id,
                Order.order_type_id == OrderType.SERVICE,
                Order.status == OrderStatus.DELIVERED,
                Order.created_at >= self.window_start(),
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()
