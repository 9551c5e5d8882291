import os
import time
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# Settings are read at import time, so the environment goes first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_URL"] = "https://storefront-test.supabase.co"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storefront.database import get_session
from storefront.main import app
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.user import User

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]


def make_token(user_id: uuid.UUID, email: str, expires_in: int = 3600) -> str:
    claims = {
        "sub": str(user_id),
        "email": email,
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: uuid.UUID, email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers() -> dict[str, str]:
    """A customer; the profile row is auto-provisioned on first request."""
    return auth_headers(uuid.uuid4(), "alice@storefront.dev")


@pytest.fixture
def other_user_headers() -> dict[str, str]:
    return auth_headers(uuid.uuid4(), "bob@storefront.dev")


@pytest.fixture
def admin_headers(session: Session) -> dict[str, str]:
    admin = User(
        id=uuid.uuid4(),
        email="admin@storefront.dev",
        username="admin",
        role="admin",
    )
    session.add(admin)
    session.commit()
    return auth_headers(admin.id, admin.email)


@pytest.fixture
def category(session: Session) -> Category:
    category = Category(name="Phones")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@pytest.fixture
def make_product(session: Session, category: Category):
    created = 0

    def _make(
        name: str = "Pixel 9",
        price: str = "60.00",
        count_in_stock: int = 10,
        rating: float = 0.0,
    ) -> Product:
        nonlocal created
        created += 1
        product = Product(
            name=name,
            image="https://cdn.storefront.dev/pixel.png",
            brand="Google",
            quantity=1,
            category_id=category.id,
            description=f"{name} description",
            price=Decimal(price),
            count_in_stock=count_in_stock,
            rating=rating,
            created_at=datetime.now(timezone.utc) + timedelta(seconds=created),
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make
