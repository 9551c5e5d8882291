# storefront/routers/categories.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.database import get_session
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/category", tags=["Categories"])

repo = CategoryRepository()
product_repo = ProductRepository()
service = CategoryService(repo, product_repo)


# -------- Public endpoints --------


@router.get("/categories", response_model=list[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    """
    List all categories (alphabetical).
    """
    return service.list_categories(session)


@router.get("/{category_id}", response_model=CategoryRead)
def read_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_category(session, category_id)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(
    payload: CategoryCreate,
    session: Session = Depends(get_session),
):
    """
    Create a category (admin only). Names must be unique.
    """
    return service.create_category(session, payload)


@router.put(
    "/{category_id}",
    response_model=CategoryRead,
    dependencies=[Depends(require_admin)],
)
def update_category(
    category_id: uuid.UUID,
    payload: CategoryUpdate,
    session: Session = Depends(get_session),
):
    return service.update_category(session, category_id, payload)


@router.delete(
    "/{category_id}",
    response_model=CategoryRead,
    dependencies=[Depends(require_admin)],
)
def remove_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a category that has no products (admin only).
    Returns the deleted category.
    """
    return service.delete_category(session, category_id)
