# storefront/services/cart_state.py
"""
Pure cart and favorites state transitions.

Every function takes a state object and returns a new one; nothing here
touches storage. Persistence is done by the caller (see CartService).
"""
import uuid
from decimal import Decimal

from storefront.core.pricing import compute_totals
from storefront.schemas.cart import (
    DEFAULT_PAYMENT_METHOD,
    CartItem,
    CartState,
    FavoriteProduct,
)
from storefront.schemas.order import ShippingAddress


def initial_cart_state() -> CartState:
    """Hard-coded empty cart (all totals 0.00, not the priced empty cart)."""
    return CartState(
        items=[],
        shipping_address=None,
        payment_method=DEFAULT_PAYMENT_METHOD,
        items_total=Decimal("0.00"),
        shipping_total=Decimal("0.00"),
        tax_total=Decimal("0.00"),
        grand_total=Decimal("0.00"),
    )


def update_cart(state: CartState) -> CartState:
    """Recompute the derived totals from the current items."""
    totals = compute_totals(state.items)
    return state.model_copy(
        update={
            "items_total": Decimal(totals.items_total),
            "shipping_total": Decimal(totals.shipping_total),
            "tax_total": Decimal(totals.tax_total),
            "grand_total": Decimal(totals.grand_total),
        }
    )


def add_to_cart(state: CartState, item: CartItem) -> CartState:
    """
    Insert or replace an entry keyed by product_id.

    An existing entry is replaced where it stands, so display order
    never changes on re-add.
    """
    if any(x.product_id == item.product_id for x in state.items):
        items = [item if x.product_id == item.product_id else x for x in state.items]
    else:
        items = [*state.items, item]
    return update_cart(state.model_copy(update={"items": items}))


def remove_from_cart(state: CartState, product_id: uuid.UUID) -> CartState:
    items = [x for x in state.items if x.product_id != product_id]
    return update_cart(state.model_copy(update={"items": items}))


def clear_cart_items(state: CartState) -> CartState:
    return update_cart(state.model_copy(update={"items": []}))


def reset_cart() -> CartState:
    return initial_cart_state()


def set_shipping_address(state: CartState, address: ShippingAddress) -> CartState:
    return state.model_copy(update={"shipping_address": address})


def set_payment_method(state: CartState, payment_method: str) -> CartState:
    return state.model_copy(update={"payment_method": payment_method})


# ---- Favorites ----


def add_favorite(
    favorites: list[FavoriteProduct],
    product: FavoriteProduct,
) -> list[FavoriteProduct]:
    if any(p.product_id == product.product_id for p in favorites):
        return list(favorites)
    return [*favorites, product]


def remove_favorite(
    favorites: list[FavoriteProduct],
    product_id: uuid.UUID,
) -> list[FavoriteProduct]:
    return [p for p in favorites if p.product_id != product_id]
