# storefront/routers/products.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin, require_auth
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import (
    ProductCreate,
    ProductDetailRead,
    ProductFilter,
    ProductPage,
    ProductRead,
    ProductUpdate,
    ProductWithCategoryRead,
    ReviewCreate,
)
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
category_repo = CategoryRepository()
service = ProductService(repo, category_repo)


# -------- Public endpoints --------


@router.get("", response_model=ProductPage)
def search_products(
    session: Session = Depends(get_session),
    keyword: str | None = None,
    page: int = 1,
):
    """
    Search products by name (case-insensitive), 6 per page.
    """
    return service.search_products(session, keyword=keyword, page=page)


@router.get("/allproducts", response_model=list[ProductWithCategoryRead])
def list_all_products(session: Session = Depends(get_session)):
    """
    12 newest products with their category.
    """
    return service.list_all_products(session)


@router.get("/top", response_model=list[ProductRead])
def list_top_products(session: Session = Depends(get_session)):
    """
    4 best-rated products.
    """
    return service.list_top_products(session)


@router.get("/new", response_model=list[ProductRead])
def list_new_products(session: Session = Depends(get_session)):
    """
    5 most recently added products.
    """
    return service.list_new_products(session)


@router.post("/filtered-products", response_model=list[ProductRead])
def filter_products(
    payload: ProductFilter,
    session: Session = Depends(get_session),
):
    """
    Filter by category ids (`checked`) and price range (`radio`).
    """
    return service.filter_products(session, payload)


@router.get("/{product_id}", response_model=ProductDetailRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product with its reviews.
    """
    return service.get_product_detail(session, product_id)


@router.post(
    "/{product_id}/reviews",
    status_code=status.HTTP_201_CREATED,
)
def add_review(
    product_id: uuid.UUID,
    payload: ReviewCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
) -> dict[str, str]:
    """
    Review a product (once per user).
    """
    service.add_review(session, product_id, current_user, payload)
    return {"message": "Review added"}


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only).
    """
    return service.create_product(session, payload)


@router.patch(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing product (admin only).

    Price changes never affect orders that were already placed.
    """
    return service.update_product(session, product_id, payload)


@router.delete(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a product, its reviews and its Storage image (admin only).
    Returns the deleted product.
    """
    return service.delete_product(session, product_id)
