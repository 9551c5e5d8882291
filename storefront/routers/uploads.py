# storefront/routers/uploads.py
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from storefront.core.auth import require_admin
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ImageUploadRead
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/uploads", tags=["Uploads"])

service = ProductService(ProductRepository(), CategoryRepository())


@router.post(
    "",
    response_model=ImageUploadRead,
    dependencies=[Depends(require_admin)],
    summary="Upload a product image",
)
def upload_image(image: UploadFile | None = File(default=None)):
    """
    Upload a single image (form field `image`) and return its public URL.

    - Accepts JPEG, PNG, WEBP (both extension and content type are checked).
    - Max 5MB.
    """
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No image file provided",
        )

    url = service.upload_image(
        filename=image.filename,
        content_type=image.content_type or "",
        file_bytes=image.file.read(),
    )
    return ImageUploadRead(message="Image uploaded successfully", image=url)
