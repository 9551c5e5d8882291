# storefront/services/order_service.py
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from sqlmodel import Session

from storefront.core.errors import (
    EmptyOrder,
    OrderAlreadyDelivered,
    OrderAlreadyPaid,
    OrderNotFound,
    ProductNotFound,
)
from storefront.core.pricing import LineItem, compute_totals, quantize_money
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.order import (
    OrderCreate,
    OrderItemRead,
    OrderItemRef,
    OrderRead,
    PaymentConfirmation,
    PaymentResultRead,
    ShippingAddress,
)
from storefront.services.cart_service import CART_KEY

logger = logging.getLogger(__name__)

ProductLookup = Callable[[uuid.UUID], Product | None]


def build_order_lines(
    refs: list[OrderItemRef],
    lookup: ProductLookup,
) -> list[tuple[Product, LineItem]]:
    """
    Resolve client item references against the catalog.

    Every reference is resolved before anything is returned, so a single
    unknown product aborts the whole order. Client-sent prices are ignored.

    Raises:
        EmptyOrder: refs is empty.
        ProductNotFound: a product_id has no catalog entry.
    """
    if not refs:
        raise EmptyOrder()

    lines: list[tuple[Product, LineItem]] = []
    for ref in refs:
        product = lookup(ref.product_id)
        if product is None:
            raise ProductNotFound(ref.product_id)
        lines.append(
            (
                product,
                LineItem(
                    product_id=product.id,
                    unit_price=product.price,
                    quantity=ref.quantity,
                ),
            )
        )
    return lines


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Freeze catalog prices into order items
      - Compute totals with the price calculator
      - Persist order + items and drop the buyer's cart in one transaction
      - Paid / delivered transitions (each allowed once)
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        state_repo: ClientStateRepository,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.state_repo = state_repo

    # -------- User-facing operations --------

    def create_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: OrderCreate,
    ) -> OrderRead:
        """
        Create an order from client item references.

        Steps:
          1. Look up every referenced product (one query).
          2. Build frozen line items with catalog prices.
          3. Compute totals.
          4. Insert Order + OrderItem rows, discard the stored cart.
          5. Commit once and return the full order.

        Nothing is written unless every step before 4 succeeds.
        """
        catalog = self.product_repo.get_many(
            session, (ref.product_id for ref in payload.order_items)
        )
        lines = build_order_lines(payload.order_items, catalog.get)
        totals = compute_totals(line for _, line in lines)

        address = payload.shipping_address
        order = Order(
            user_id=user_id,
            address=address.address,
            city=address.city,
            postal_code=address.postal_code,
            country=address.country,
            payment_method=payload.payment_method,
            items_total=Decimal(totals.items_total),
            shipping_total=Decimal(totals.shipping_total),
            tax_total=Decimal(totals.tax_total),
            grand_total=Decimal(totals.grand_total),
        )
        order_items = [
            OrderItem(
                product_id=product.id,
                name=product.name,
                image=product.image,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for product, line in lines
        ]
        self.order_repo.add(session, order, order_items)

        self.state_repo.discard(session, user_id, CART_KEY, commit=False)

        session.commit()
        session.refresh(order)

        logger.info(
            f"Order {order.id} created for user {user_id}: "
            f"{len(order_items)} item(s), total {totals.grand_total}"
        )
        return self._build_order_dto(order, order_items)

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        orders = self.order_repo.list_orders(session, user_id=user_id, skip=skip, limit=limit)
        return self._build_order_dtos(session, orders)

    def get_order(self, session: Session, order_id: uuid.UUID) -> Order:
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    def get_order_dto(self, session: Session, order_id: uuid.UUID) -> OrderRead:
        return self._load_order_dto(session, self.get_order(session, order_id))

    # -------- Status transitions --------

    def mark_paid(
        self,
        session: Session,
        order_id: uuid.UUID,
        payment: PaymentConfirmation,
    ) -> OrderRead:
        """
        Created -> Paid. Stores the gateway confirmation.

        Raises:
            OrderNotFound, OrderAlreadyPaid
        """
        order = self.get_order(session, order_id)
        if order.is_paid:
            raise OrderAlreadyPaid(order_id)

        now = datetime.now(timezone.utc)
        order.is_paid = True
        order.paid_at = now
        order.payment_id = payment.id
        order.payment_status = payment.status
        order.payment_update_time = payment.update_time
        order.payer_email = payment.payer.email_address if payment.payer else None
        order.updated_at = now

        self.order_repo.save(session, order)
        session.commit()
        session.refresh(order)

        logger.info(f"Order {order.id} marked paid (payment {payment.id})")
        return self._load_order_dto(session, order)

    def mark_delivered(self, session: Session, order_id: uuid.UUID) -> OrderRead:
        """
        -> Delivered. Independent of the paid flag.

        Raises:
            OrderNotFound, OrderAlreadyDelivered
        """
        order = self.get_order(session, order_id)
        if order.is_delivered:
            raise OrderAlreadyDelivered(order_id)

        now = datetime.now(timezone.utc)
        order.is_delivered = True
        order.delivered_at = now
        order.updated_at = now

        self.order_repo.save(session, order)
        session.commit()
        session.refresh(order)

        logger.info(f"Order {order.id} marked delivered")
        return self._load_order_dto(session, order)

    # -------- Admin operations --------

    def list_all_orders(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        orders = self.order_repo.list_orders(session, skip=skip, limit=limit)
        return self._build_order_dtos(session, orders)

    # -------- Helper DTO builder --------

    def _load_order_dto(self, session: Session, order: Order) -> OrderRead:
        items = self.order_repo.items_by_order(session, [order.id])
        return self._build_order_dto(order, items[order.id])

    def _build_order_dtos(self, session: Session, orders: list[Order]) -> list[OrderRead]:
        items = self.order_repo.items_by_order(session, [o.id for o in orders])
        return [self._build_order_dto(o, items[o.id]) for o in orders]

    def _build_order_dto(self, order: Order, items: list[OrderItem]) -> OrderRead:
        """
        Compose OrderRead from ORM rows. Totals come from the stored order,
        never recomputed.
        """
        item_dtos = [
            OrderItemRead(
                id=it.id,
                product_id=it.product_id,
                name=it.name,
                image=it.image,
                quantity=it.quantity,
                unit_price=it.unit_price,
                line_total=quantize_money(Decimal(it.unit_price) * it.quantity),
            )
            for it in items
        ]

        payment_result = None
        if order.is_paid:
            payment_result = PaymentResultRead(
                id=order.payment_id,
                status=order.payment_status,
                update_time=order.payment_update_time,
                email_address=order.payer_email,
            )

        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            order_items=item_dtos,
            shipping_address=ShippingAddress(
                address=order.address,
                city=order.city,
                postal_code=order.postal_code,
                country=order.country,
            ),
            payment_method=order.payment_method,
            payment_result=payment_result,
            items_total=order.items_total,
            shipping_total=order.shipping_total,
            tax_total=order.tax_total,
            grand_total=order.grand_total,
            is_paid=order.is_paid,
            paid_at=order.paid_at,
            is_delivered=order.is_delivered,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
