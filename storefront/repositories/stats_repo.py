# storefront/repositories/stats_repo.py
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.order import Order


def _day_start(day: date) -> datetime:
    # paid_at is stored in UTC
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class StatsRepository:
    """
    Read-only aggregates over the orders table.
    """

    def count_orders(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(Order)).one()
        return int(value or 0)

    def total_sales(self, session: Session) -> Decimal:
        """Sum of grand_total over every order, paid or not."""
        stmt = select(func.coalesce(func.sum(Order.grand_total), 0))
        return Decimal(str(session.exec(stmt).one() or 0))

    def sales_by_date(
        self,
        session: Session,
        start: date | None = None,
        end: date | None = None,
    ) -> list[tuple]:
        """
        Paid revenue per calendar day of paid_at, oldest day first.
        `start` and `end` are inclusive.

        Rows: (day, revenue, order_count). `day` is a date on Postgres and
        an ISO string on SQLite.
        """
        day_expr = func.date(Order.paid_at)

        stmt = select(
            day_expr.label("day"),
            func.coalesce(func.sum(Order.grand_total), 0).label("revenue"),
            func.count(Order.id).label("order_count"),
        ).where(Order.is_paid == True)  # noqa: E712

        if start is not None:
            stmt = stmt.where(Order.paid_at >= _day_start(start))
        if end is not None and end < date.max:
            stmt = stmt.where(Order.paid_at < _day_start(end + timedelta(days=1)))

        stmt = stmt.group_by(day_expr).order_by(day_expr)
        return list(session.exec(stmt).all())
