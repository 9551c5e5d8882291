# storefront/routers/users.py
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from storefront.core.auth import require_auth, require_admin
from storefront.core.config import get_settings
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import LogoutRead, ProfileUpdate, UserAdminUpdate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

settings = get_settings()
service = UserService(
    UserRepository(),
    OrderRepository(),
    ProductRepository(),
    ClientStateRepository(),
)


# -------- Own profile --------


@router.get("/me", response_model=UserRead)
def read_profile(current_user: User = Depends(require_auth)):
    """
    The caller's profile (provisioned on first authenticated request).
    """
    return current_user


@router.put("/me", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.update_profile(session, current_user, payload)


@router.post("/logout", response_model=LogoutRead)
def logout(response: Response):
    """
    Drop the auth cookie. Bearer tokens are revoked by Supabase, not here.
    """
    response.delete_cookie(settings.AUTH_COOKIE_NAME, httponly=True)
    return LogoutRead(message="Logged out successfully")


# -------- Admin --------


@router.get(
    "",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(
    session: Session = Depends(get_session),
    search: str | None = None,
    skip: int = 0,
    limit: int = 50,
):
    return service.list_users(session, search, skip, limit)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(require_admin)],
)
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_user(session, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: uuid.UUID,
    payload: UserAdminUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    """
    Rename a user and/or change their role (admin only).
    """
    return service.update_user(session, admin, user_id, payload)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a shopper account (admin only). Admin accounts are refused.
    """
    service.delete_user(session, user_id)
