# storefront/services/cart_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.errors import InvalidLineItem
from storefront.models.product import Product
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItem,
    CartItemCreate,
    CartState,
    FavoriteCreate,
    FavoriteProduct,
    FavoritesRead,
    PaymentMethodUpdate,
)
from storefront.schemas.order import ShippingAddress
from storefront.services import cart_state

CART_KEY = "cart"
FAVORITES_KEY = "favorites"


class CartService:
    """
    Business logic for the per-user cart.

    Responsibilities:
      - snapshot product data (price, name, image, stock) from the catalog
      - enforce quantity <= count_in_stock
      - apply the pure cart transitions (services/cart_state.py)
      - persist the full cart snapshot after every mutation
    """

    def __init__(self, state_repo: ClientStateRepository, product_repo: ProductRepository):
        self.state_repo = state_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def _load(self, session: Session, user_id: uuid.UUID) -> CartState:
        payload = self.state_repo.load(session, user_id, CART_KEY)
        if payload is None:
            return cart_state.initial_cart_state()
        return CartState.model_validate(payload)

    def _persist(self, session: Session, user_id: uuid.UUID, state: CartState) -> CartState:
        self.state_repo.save(session, user_id, CART_KEY, state.model_dump(mode="json"))
        return state

    # ---- public operations ----

    def get_cart(self, session: Session, user_id: uuid.UUID) -> CartState:
        return self._load(session, user_id)

    def add_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: CartItemCreate,
    ) -> CartState:
        """
        Add a product to the cart, or replace its entry if already present.

        Rules:
          - product must exist
          - quantity <= count_in_stock
          - unit_price is taken from the current product.price
        """
        product = self._get_product(session, payload.product_id)

        if payload.quantity > product.count_in_stock:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Not enough stock available",
            )

        item = CartItem(
            product_id=product.id,
            name=product.name,
            image=product.image,
            unit_price=product.price,
            count_in_stock=product.count_in_stock,
            quantity=payload.quantity,
        )
        try:
            state = cart_state.add_to_cart(self._load(session, user_id), item)
        except InvalidLineItem as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e
        return self._persist(session, user_id, state)

    def remove_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> CartState:
        """
        Remove a product from the cart. Removing an absent product is a no-op.
        """
        state = cart_state.remove_from_cart(self._load(session, user_id), product_id)
        return self._persist(session, user_id, state)

    def clear(self, session: Session, user_id: uuid.UUID) -> CartState:
        """
        Empty the item list; address and payment method are kept.
        """
        state = cart_state.clear_cart_items(self._load(session, user_id))
        return self._persist(session, user_id, state)

    def reset(self, session: Session, user_id: uuid.UUID) -> CartState:
        """
        Drop the stored cart and return the initial empty state.
        """
        self.state_repo.discard(session, user_id, CART_KEY)
        return cart_state.reset_cart()

    def save_shipping_address(
        self,
        session: Session,
        user_id: uuid.UUID,
        address: ShippingAddress,
    ) -> CartState:
        state = cart_state.set_shipping_address(self._load(session, user_id), address)
        return self._persist(session, user_id, state)

    def save_payment_method(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: PaymentMethodUpdate,
    ) -> CartState:
        state = cart_state.set_payment_method(
            self._load(session, user_id), payload.payment_method
        )
        return self._persist(session, user_id, state)


class FavoritesService:
    """
    Per-user favorite products, stored as one ordered snapshot.
    """

    def __init__(self, state_repo: ClientStateRepository, product_repo: ProductRepository):
        self.state_repo = state_repo
        self.product_repo = product_repo

    def _load(self, session: Session, user_id: uuid.UUID) -> list[FavoriteProduct]:
        payload = self.state_repo.load(session, user_id, FAVORITES_KEY)
        if payload is None:
            return []
        return FavoritesRead.model_validate(payload).items

    def _persist(
        self,
        session: Session,
        user_id: uuid.UUID,
        favorites: list[FavoriteProduct],
    ) -> FavoritesRead:
        result = FavoritesRead(items=favorites)
        self.state_repo.save(session, user_id, FAVORITES_KEY, result.model_dump(mode="json"))
        return result

    def list_favorites(self, session: Session, user_id: uuid.UUID) -> FavoritesRead:
        return FavoritesRead(items=self._load(session, user_id))

    def add_favorite(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: FavoriteCreate,
    ) -> FavoritesRead:
        product = self.product_repo.get_by_id(session, payload.product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        favorite = FavoriteProduct(
            product_id=product.id,
            name=product.name,
            price=product.price,
            image=product.image,
        )
        favorites = cart_state.add_favorite(self._load(session, user_id), favorite)
        return self._persist(session, user_id, favorites)

    def remove_favorite(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> FavoritesRead:
        favorites = cart_state.remove_favorite(self._load(session, user_id), product_id)
        return self._persist(session, user_id, favorites)
