# storefront/repositories/product_repo.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.product import Product, Review


class ProductRepository:
    """
    Data access layer for Product & Review.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    # ----- Products -----

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_many(
        self,
        session: Session,
        product_ids: Iterable[uuid.UUID],
    ) -> dict[uuid.UUID, Product]:
        """
        Fetch several products in one query, keyed by id.
        Missing ids are simply absent from the result.
        """
        ids = list(set(product_ids))
        if not ids:
            return {}
        stmt = select(Product).where(Product.id.in_(ids))
        return {p.id: p for p in session.exec(stmt).all()}

    def search(
        self,
        session: Session,
        keyword: str | None,
        skip: int = 0,
        limit: int = 6,
    ) -> tuple[list[Product], int]:
        """
        Case-insensitive name search.

        Returns:
            (page of products, total match count)
        """
        stmt = select(Product)
        count_stmt = select(func.count()).select_from(Product)
        if keyword:
            pattern = f"%{keyword.lower()}%"
            stmt = stmt.where(func.lower(Product.name).like(pattern))
            count_stmt = count_stmt.where(func.lower(Product.name).like(pattern))

        stmt = stmt.order_by(Product.created_at.desc()).offset(skip).limit(limit)
        total = session.exec(count_stmt).one()
        return session.exec(stmt).all(), int(total or 0)

    def list_newest(self, session: Session, limit: int) -> list[Product]:
        stmt = select(Product).order_by(Product.created_at.desc()).limit(limit)
        return session.exec(stmt).all()

    def list_top_rated(self, session: Session, limit: int) -> list[Product]:
        stmt = select(Product).order_by(Product.rating.desc()).limit(limit)
        return session.exec(stmt).all()

    def filter_products(
        self,
        session: Session,
        category_ids: list[uuid.UUID],
        price_range: tuple[Decimal, Decimal] | None,
    ) -> list[Product]:
        stmt = select(Product)
        if category_ids:
            stmt = stmt.where(Product.category_id.in_(category_ids))
        if price_range is not None:
            low, high = price_range
            stmt = stmt.where(Product.price >= low, Product.price <= high)
        return session.exec(stmt.order_by(Product.created_at.desc())).all()

    def count_for_category(self, session: Session, category_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Product)
            .where(Product.category_id == category_id)
        )
        return int(session.exec(stmt).one() or 0)

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()

    # ----- Reviews -----

    def list_reviews(self, session: Session, product_id: uuid.UUID) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.product_id == product_id)
            .order_by(Review.created_at)
        )
        return session.exec(stmt).all()

    def get_review_by_user(
        self,
        session: Session,
        product_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> Review | None:
        stmt = select(Review).where(
            Review.product_id == product_id, Review.user_id == user_id
        )
        return session.exec(stmt).first()

    def add_review(self, session: Session, review: Review) -> Review:
        """
        Insert without committing; the service updates the product's
        aggregate rating in the same transaction.
        """
        session.add(review)
        session.flush()
        return review

    def list_reviews_by_user(self, session: Session, user_id: uuid.UUID) -> list[Review]:
        return session.exec(select(Review).where(Review.user_id == user_id)).all()

    def refresh_rating(self, session: Session, product: Product) -> None:
        """
        Recompute rating / num_reviews from the stored reviews. No commit.
        """
        reviews = self.list_reviews(session, product.id)
        product.num_reviews = len(reviews)
        product.rating = (
            sum(r.rating for r in reviews) / len(reviews) if reviews else 0.0
        )
        product.updated_at = datetime.now(timezone.utc)
        session.add(product)

    def delete_reviews(self, session: Session, product_id: uuid.UUID) -> None:
        for review in self.list_reviews(session, product_id):
            session.delete(review)
        # Reviews go before the product row they reference
        session.flush()
