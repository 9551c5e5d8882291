# storefront/routers/orders.py
import uuid
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from storefront.core.auth import require_auth, require_admin
from storefront.core.errors import (
    EmptyOrder,
    InvalidLineItem,
    OrderAlreadyDelivered,
    OrderAlreadyPaid,
    OrderNotFound,
    ProductNotFound,
    StorefrontError,
)
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.order import OrderCreate, OrderRead, PaymentConfirmation
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
product_repo = ProductRepository()
state_repo = ClientStateRepository()
service = OrderService(order_repo, product_repo, state_repo)


def _raise_order_http_error(e: StorefrontError) -> NoReturn:
    if isinstance(e, (EmptyOrder, InvalidLineItem)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if isinstance(e, (ProductNotFound, OrderNotFound)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    if isinstance(e, (OrderAlreadyPaid, OrderAlreadyDelivered)):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    ) from e


def _ensure_can_access(session: Session, order_id: uuid.UUID, user: User) -> None:
    """
    Owners and admins may see/pay an order; others get 404 so order ids
    don't leak.
    """
    try:
        order = service.get_order(session, order_id)
    except OrderNotFound as e:
        _raise_order_http_error(e)
    if order.user_id != user.id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )


# -------- User-facing endpoints --------


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Create an order from item references.

    - Unit prices come from the catalog, never from the request.
    - 400 if no items, 404 if any product is unknown (nothing is saved).
    - The stored cart of the buyer is discarded on success.
    """
    try:
        return service.create_order(session, current_user.id, payload)
    except StorefrontError as e:
        _raise_order_http_error(e)


@router.get("/mine", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    skip: int = 0,
    limit: int = 50,
):
    """
    List the authenticated user's orders, newest first.
    """
    return service.list_user_orders(session, current_user.id, skip, limit)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get a single order (owner or admin).
    """
    _ensure_can_access(session, order_id, current_user)
    return service.get_order_dto(session, order_id)


@router.put("/{order_id}/pay", response_model=OrderRead)
def mark_order_as_paid(
    order_id: uuid.UUID,
    payload: PaymentConfirmation,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Record the payment gateway confirmation (owner or admin).

    409 if the order is already paid.
    """
    _ensure_can_access(session, order_id, current_user)
    try:
        return service.mark_paid(session, order_id, payload)
    except StorefrontError as e:
        _raise_order_http_error(e)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[OrderRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List all orders (admin only).
    """
    return service.list_all_orders(session, skip, limit)


@router.put(
    "/{order_id}/deliver",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def mark_order_as_delivered(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Mark an order delivered (admin only).

    409 if the order is already delivered.
    """
    try:
        return service.mark_delivered(session, order_id)
    except StorefrontError as e:
        _raise_order_http_error(e)
