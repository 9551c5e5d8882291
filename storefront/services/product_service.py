# storefront/services/product_service.py
import math
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.storage_utils import (
    upload_to_storage,
    delete_public_url,
    generate_filename,
)
from storefront.models.product import Product, Review
from storefront.models.user import User
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.category import CategoryRead
from storefront.schemas.product import (
    ProductCreate,
    ProductDetailRead,
    ProductFilter,
    ProductPage,
    ProductRead,
    ProductUpdate,
    ProductWithCategoryRead,
    ReviewCreate,
    ReviewRead,
)


# --- Listing config ---

PAGE_SIZE = 6
ALL_PRODUCTS_LIMIT = 12
TOP_PRODUCTS_LIMIT = 4
NEW_PRODUCTS_LIMIT = 5

# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}


class ProductService:
    """
    Business logic for Product & Review.

    Responsibilities:
      - catalog CRUD (admin-only, enforced at router via require_admin)
      - search / listing / filtering for the storefront
      - reviews and the derived rating
      - image upload orchestration with Supabase Storage
    """

    def __init__(self, repo: ProductRepository, category_repo: CategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    # ----- Helpers -----

    def _ensure_category(self, session: Session, category_id: uuid.UUID) -> None:
        if self.category_repo.get_by_id(session, category_id) is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category not found",
            )

    @staticmethod
    def _validate_and_get_ext(
        filename: str | None,
        content_type: str,
        file_bytes: bytes,
    ) -> str:
        """
        Both the MIME type and the filename extension must look like an image.
        """
        ext = ""
        if filename and "." in filename:
            ext = "." + filename.rsplit(".", 1)[1].lower()

        if (
            content_type not in ALLOWED_IMAGE_CONTENT_TYPES
            or ext not in ALLOWED_IMAGE_EXTENSIONS
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Images only",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    def _with_category(self, session: Session, product: Product) -> ProductWithCategoryRead:
        category = self.category_repo.get_by_id(session, product.category_id)
        return ProductWithCategoryRead(
            **ProductRead.model_validate(product, from_attributes=True).model_dump(),
            category=(
                CategoryRead.model_validate(category, from_attributes=True)
                if category
                else None
            ),
        )

    # ----- Storefront reads -----

    def search_products(
        self,
        session: Session,
        keyword: str | None = None,
        page: int = 1,
    ) -> ProductPage:
        """
        Keyword search, PAGE_SIZE products per page.
        """
        page = max(page, 1)
        products, total = self.repo.search(
            session,
            keyword.strip() if keyword else None,
            skip=(page - 1) * PAGE_SIZE,
            limit=PAGE_SIZE,
        )
        pages = math.ceil(total / PAGE_SIZE)
        return ProductPage(
            products=[ProductRead.model_validate(p, from_attributes=True) for p in products],
            page=page,
            pages=pages,
            has_more=page < pages,
        )

    def list_all_products(self, session: Session) -> list[ProductWithCategoryRead]:
        products = self.repo.list_newest(session, ALL_PRODUCTS_LIMIT)
        return [self._with_category(session, p) for p in products]

    def list_top_products(self, session: Session) -> list[Product]:
        return self.repo.list_top_rated(session, TOP_PRODUCTS_LIMIT)

    def list_new_products(self, session: Session) -> list[Product]:
        return self.repo.list_newest(session, NEW_PRODUCTS_LIMIT)

    def filter_products(self, session: Session, payload: ProductFilter) -> list[Product]:
        price_range = (payload.radio[0], payload.radio[1]) if payload.radio else None
        return self.repo.filter_products(session, payload.checked, price_range)

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def get_product_detail(self, session: Session, product_id: uuid.UUID) -> ProductDetailRead:
        product = self.get_product(session, product_id)
        reviews = self.repo.list_reviews(session, product_id)
        return ProductDetailRead(
            **ProductRead.model_validate(product, from_attributes=True).model_dump(),
            reviews=[ReviewRead.model_validate(r, from_attributes=True) for r in reviews],
        )

    # ----- Admin CRUD -----

    def create_product(self, session: Session, payload: ProductCreate) -> Product:
        self._ensure_category(session, payload.category_id)
        product = Product(**payload.model_dump())
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product. Existing orders keep their frozen prices.
        """
        product = self.get_product(session, product_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        if "category_id" in changes:
            self._ensure_category(session, changes["category_id"])

        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)

        return self.repo.update(session, product)

    def delete_product(self, session: Session, product_id: uuid.UUID) -> ProductRead:
        """
        Delete a product with its reviews, then clean up its Storage image.
        The image is removed only after the rows are committed.
        """
        product = self.get_product(session, product_id)
        removed = ProductRead.model_validate(product, from_attributes=True)

        self.repo.delete_reviews(session, product_id)
        self.repo.delete(session, product)

        if removed.image:
            delete_public_url(removed.image)
        return removed

    # ----- Reviews -----

    def add_review(
        self,
        session: Session,
        product_id: uuid.UUID,
        user: User,
        payload: ReviewCreate,
    ) -> None:
        """
        Add the user's review and refresh rating / num_reviews.

        Each user may review a product once.
        """
        product = self.get_product(session, product_id)

        if self.repo.get_review_by_user(session, product_id, user.id) is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product already reviewed",
            )

        self.repo.add_review(
            session,
            Review(
                product_id=product_id,
                user_id=user.id,
                name=user.username,
                rating=payload.rating,
                comment=payload.comment,
            ),
        )

        self.repo.refresh_rating(session, product)
        session.commit()

    # ----- Images -----

    def upload_image(
        self,
        filename: str | None,
        content_type: str,
        file_bytes: bytes,
    ) -> str:
        """
        Upload a product image to a random filename and return its public URL.

        Path pattern:
            products/<uuid>.<ext>
        """
        ext = self._validate_and_get_ext(filename, content_type, file_bytes)
        path = f"products/{generate_filename(ext)}"
        return upload_to_storage(path, file_bytes)
