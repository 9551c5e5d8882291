# storefront/schemas/stats.py
from datetime import date

from pydantic import ConfigDict
from sqlmodel import SQLModel

from storefront.core.pricing import Money


class TotalOrders(SQLModel):
    model_config = ConfigDict(extra="forbid")

    total_orders: int


class TotalSales(SQLModel):
    """
    Sum of grand_total over all orders (paid or not).
    """
    model_config = ConfigDict(extra="forbid")

    total_sales: Money


class DailySales(SQLModel):
    """
    Revenue of paid orders for one calendar day (by paid_at).
    """
    model_config = ConfigDict(extra="forbid")

    date: date
    total_sales: Money
    order_count: int
