# storefront/routers/admin_stats.py
from datetime import date

from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.database import get_session
from storefront.repositories.stats_repo import StatsRepository
from storefront.schemas.stats import DailySales, TotalOrders, TotalSales
from storefront.services.stats_service import StatsService

router = APIRouter(
    prefix="/admin/stats",
    tags=["Admin Stats"],
    dependencies=[Depends(require_admin)],
)

repo = StatsRepository()
service = StatsService(repo)


@router.get("/total-orders", response_model=TotalOrders)
def count_total_orders(session: Session = Depends(get_session)):
    return service.total_orders(session)


@router.get("/total-sales", response_model=TotalSales)
def calculate_total_sales(session: Session = Depends(get_session)):
    """
    Sum of grand totals over all orders, paid or not.
    """
    return service.total_sales(session)


@router.get("/total-sales-by-date", response_model=list[DailySales])
def calculate_total_sales_by_date(
    session: Session = Depends(get_session),
    start: date | None = None,
    end: date | None = None,
):
    """
    Paid revenue grouped by the calendar day of `paid_at`, optionally
    limited to an inclusive `start`..`end` range (YYYY-MM-DD).
    """
    return service.sales_by_date(session, start, end)
