# storefront/routers/favorites.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import FavoriteCreate, FavoritesRead
from storefront.services.cart_service import FavoritesService

router = APIRouter(prefix="/favorites", tags=["Favorites"])

state_repo = ClientStateRepository()
product_repo = ProductRepository()
service = FavoritesService(state_repo, product_repo)


@router.get("", response_model=FavoritesRead)
def list_favorites(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.list_favorites(session, current_user.id)


@router.post("", response_model=FavoritesRead)
def add_favorite(
    payload: FavoriteCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Add a product to favorites. Already-favorited products are left as is.
    """
    return service.add_favorite(session, current_user.id, payload)


@router.delete("/{product_id}", response_model=FavoritesRead)
def remove_favorite(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.remove_favorite(session, current_user.id, product_id)
