# storefront/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import CartItemCreate, CartState, PaymentMethodUpdate
from storefront.schemas.order import ShippingAddress
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

state_repo = ClientStateRepository()
product_repo = ProductRepository()
service = CartService(state_repo, product_repo)


@router.get("", response_model=CartState)
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get the current user's cart (initial empty state if none is stored).
    """
    return service.get_cart(session, current_user.id)


@router.post("", response_model=CartState)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Add a product to the cart.

    Re-adding a product replaces its entry in place (quantity is set,
    not incremented). Returns the updated cart.
    """
    return service.add_item(session, current_user.id, payload)


@router.delete("/{product_id}", response_model=CartState)
def remove_cart_item(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Remove a product from the cart (no-op if absent).
    """
    return service.remove_item(session, current_user.id, product_id)


@router.delete("", response_model=CartState)
def clear_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Remove all items. Shipping address and payment method are kept.
    """
    return service.clear(session, current_user.id)


@router.post("/reset", response_model=CartState)
def reset_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Forget the stored cart entirely and return the initial state.
    """
    return service.reset(session, current_user.id)


@router.put("/shipping-address", response_model=CartState)
def save_shipping_address(
    payload: ShippingAddress,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.save_shipping_address(session, current_user.id, payload)


@router.put("/payment-method", response_model=CartState)
def save_payment_method(
    payload: PaymentMethodUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.save_payment_method(session, current_user.id, payload)
