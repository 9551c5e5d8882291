# storefront/repositories/order_repo.py
import uuid
from collections import defaultdict
from typing import Iterable

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.order import Order, OrderItem


class OrderRepository:
    """
    Orders and their frozen line items.

    Writes only flush: checkout spans several tables and the service owns
    the single commit.
    """

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def list_orders(
        self,
        session: Session,
        user_id: uuid.UUID | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """
        Newest first; restricted to one buyer when `user_id` is given.
        """
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        stmt = stmt.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def count_for_user(self, session: Session, user_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Order).where(Order.user_id == user_id)
        return int(session.exec(stmt).one() or 0)

    def add(self, session: Session, order: Order, items: list[OrderItem]) -> Order:
        session.add(order)
        session.flush()  # order.id for the items

        for item in items:
            item.order_id = order.id
        session.add_all(items)
        session.flush()
        return order

    def save(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        return order

    def items_by_order(
        self,
        session: Session,
        order_ids: Iterable[uuid.UUID],
    ) -> dict[uuid.UUID, list[OrderItem]]:
        """
        Line items for several orders in one query.
        Orders without items map to an empty list.
        """
        ids = list(order_ids)
        grouped: dict[uuid.UUID, list[OrderItem]] = defaultdict(list)
        if not ids:
            return grouped

        stmt = select(OrderItem).where(OrderItem.order_id.in_(ids))
        for item in session.exec(stmt).all():
            grouped[item.order_id].append(item)
        return grouped
