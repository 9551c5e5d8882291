# storefront/services/category_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.category import Category
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate


class CategoryService:
    """
    Business logic for product categories.

    Responsibilities:
      - unique category names
      - refuse to delete a category that still has products
    """

    def __init__(self, repo: CategoryRepository, product_repo: ProductRepository):
        self.repo = repo
        self.product_repo = product_repo

    def _ensure_name_free(self, session: Session, name: str) -> None:
        if self.repo.get_by_name(session, name) is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category already exists",
            )

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list_categories(session)

    def get_category(self, session: Session, category_id: uuid.UUID) -> Category:
        category = self.repo.get_by_id(session, category_id)
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    def create_category(self, session: Session, payload: CategoryCreate) -> Category:
        self._ensure_name_free(session, payload.name)
        return self.repo.create(session, Category(name=payload.name))

    def update_category(
        self,
        session: Session,
        category_id: uuid.UUID,
        payload: CategoryUpdate,
    ) -> Category:
        """
        Rename a category. A missing/blank name keeps the current one.
        """
        category = self.get_category(session, category_id)

        if payload.name is not None and payload.name != category.name:
            self._ensure_name_free(session, payload.name)
            category.name = payload.name

        return self.repo.update(session, category)

    def delete_category(self, session: Session, category_id: uuid.UUID) -> CategoryRead:
        category = self.get_category(session, category_id)

        if self.product_repo.count_for_category(session, category_id) > 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category still has products",
            )

        removed = CategoryRead.model_validate(category, from_attributes=True)
        self.repo.delete(session, category)
        return removed
