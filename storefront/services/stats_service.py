# storefront/services/stats_service.py
from datetime import date
from decimal import Decimal

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.repositories.stats_repo import StatsRepository
from storefront.schemas.stats import DailySales, TotalOrders, TotalSales


class StatsService:
    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def total_orders(self, session: Session) -> TotalOrders:
        return TotalOrders(total_orders=self.repo.count_orders(session))

    def total_sales(self, session: Session) -> TotalSales:
        return TotalSales(total_sales=self.repo.total_sales(session))

    def sales_by_date(
        self,
        session: Session,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DailySales]:
        if start and end and start > end:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="start must not be after end",
            )

        rows = self.repo.sales_by_date(session, start, end)
        return [
            DailySales(
                date=date.fromisoformat(day) if isinstance(day, str) else day,
                total_sales=Decimal(str(revenue or 0)),
                order_count=int(order_count or 0),
            )
            for day, revenue, order_count in rows
        ]
