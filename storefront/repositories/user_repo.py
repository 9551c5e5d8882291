# storefront/repositories/user_repo.py
import uuid

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from storefront.core.errors import ProfileConflict
from storefront.models.user import User


class UserRepository:
    """
    Data access for shop profiles.
    """

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        return session.get(User, user_id)

    def provision(self, session: Session, user_id: uuid.UUID, email: str) -> User:
        """
        Return the profile for a verified identity, creating it on first sight
        with role "user" and the email's local part as username.

        Two first requests racing for the same identity both end up with the
        row the winner inserted.

        Raises:
            ProfileConflict: the email already belongs to a different identity.
        """
        user = self.get_by_id(session, user_id)
        if user is not None:
            return user

        user = User(id=user_id, email=email, username=email.split("@", 1)[0][:50])
        try:
            return self.save(session, user)
        except IntegrityError:
            session.rollback()

        user = self.get_by_id(session, user_id)
        if user is None:
            raise ProfileConflict(email)
        return user

    def list_users(
        self,
        session: Session,
        search: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[User]:
        """
        Oldest accounts first; `search` matches username or email, ignoring case.
        """
        stmt = select(User)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                func.lower(User.username).like(pattern)
                | func.lower(User.email).like(pattern)
            )
        stmt = stmt.order_by(User.created_at).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def save(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        session.delete(user)
        session.commit()
