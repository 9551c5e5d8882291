# storefront/repositories/client_state_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, select

from storefront.models.client_state import ClientState


class ClientStateRepository:
    """
    Durable key-value store for per-user state snapshots.

    Keys used by the app: "cart", "favorites".
    save() overwrites the whole payload.
    """

    def load(
        self,
        session: Session,
        owner_id: uuid.UUID,
        key: str,
    ) -> dict[str, Any] | None:
        row = session.get(ClientState, (owner_id, key))
        if row is None:
            return None
        return row.payload

    def save(
        self,
        session: Session,
        owner_id: uuid.UUID,
        key: str,
        payload: dict[str, Any],
    ) -> None:
        row = session.get(ClientState, (owner_id, key))
        if row is None:
            row = ClientState(owner_id=owner_id, key=key, payload=payload)
        else:
            row.payload = payload
            row.updated_at = datetime.now(timezone.utc)
        session.add(row)
        session.commit()

    def discard(
        self,
        session: Session,
        owner_id: uuid.UUID,
        key: str,
        commit: bool = True,
    ) -> None:
        """
        Remove the snapshot if present. With commit=False the caller owns
        the transaction (checkout clears the cart together with the order).
        """
        row = session.get(ClientState, (owner_id, key))
        if row is not None:
            session.delete(row)
        if commit:
            session.commit()

    def discard_all(self, session: Session, owner_id: uuid.UUID) -> None:
        """Remove every snapshot of one owner. No commit."""
        rows = session.exec(
            select(ClientState).where(ClientState.owner_id == owner_id)
        ).all()
        for row in rows:
            session.delete(row)
