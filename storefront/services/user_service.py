# storefront/services/user_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.user import User
from storefront.repositories.client_state_repo import ClientStateRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import ProfileUpdate, UserAdminUpdate


class UserService:
    """
    Shopper profiles and the admin user list.

    Rules:
      - an admin cannot change their own role (no self-lockout)
      - admin accounts cannot be deleted
      - shoppers with order history cannot be deleted (orders are records)
    """

    def __init__(
        self,
        repo: UserRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        state_repo: ClientStateRepository,
    ):
        self.repo = repo
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.state_repo = state_repo

    def update_profile(
        self,
        session: Session,
        current_user: User,
        payload: ProfileUpdate,
    ) -> User:
        current_user.username = payload.username
        return self.repo.save(session, current_user)

    # ----- Admin -----

    def list_users(
        self,
        session: Session,
        search: str | None,
        skip: int,
        limit: int,
    ) -> list[User]:
        return self.repo.list_users(session, search=search, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_user(
        self,
        session: Session,
        acting_admin: User,
        user_id: uuid.UUID,
        payload: UserAdminUpdate,
    ) -> User:
        user = self.get_user(session, user_id)

        if payload.role is not None and payload.role != user.role:
            if user.id == acting_admin.id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Cannot change your own role",
                )
            user.role = payload.role

        if payload.username is not None:
            user.username = payload.username

        return self.repo.save(session, user)

    def delete_user(self, session: Session, user_id: uuid.UUID) -> None:
        """
        Delete a shopper together with their reviews (ratings recomputed)
        and stored cart / favorites.
        """
        user = self.get_user(session, user_id)
        if user.is_admin:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete admin user",
            )
        if self.order_repo.count_for_user(session, user_id) > 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete a user with orders",
            )

        reviewed = set()
        for review in self.product_repo.list_reviews_by_user(session, user_id):
            reviewed.add(review.product_id)
            session.delete(review)
        session.flush()
        for product_id in reviewed:
            product = self.product_repo.get_by_id(session, product_id)
            if product is not None:
                self.product_repo.refresh_rating(session, product)

        self.state_repo.discard_all(session, user_id)
        session.flush()
        self.repo.delete(session, user)
