# storefront/core/storage_utils.py
import logging
import uuid

from storefront.core.config import get_settings
from storefront.core.supabase_client import supabase_admin

settings = get_settings()
logger = logging.getLogger(__name__)

BUCKET = settings.STORAGE_BUCKET


def _bucket():
    return supabase_admin().storage.from_(BUCKET)


def upload_to_storage(path: str, file_bytes: bytes) -> str:
    """
    Store bytes at `path` inside the bucket (overwriting any existing object)
    and return the object's public URL.

    Example path: "products/<uuid>.png"
    """
    bucket = _bucket()
    bucket.upload(path, file_bytes, {"upsert": "true"})
    return bucket.get_public_url(path)


def delete_from_storage(path: str) -> None:
    _bucket().remove([path])


def extract_path_from_public_url(url: str) -> str | None:
    """
    Object path of a public URL from our bucket, or None for foreign URLs.

        https://<proj>.supabase.co/storage/v1/object/public/assets/products/p.png
        -> "products/p.png"
    """
    marker = f"/storage/v1/object/public/{BUCKET}/"
    _, found, path = url.partition(marker)
    if not found or not path:
        return None
    return path


def delete_public_url(url: str) -> None:
    """
    Remove the object behind a public URL. Images hosted elsewhere (seed
    data, external CDNs) are left alone.
    """
    path = extract_path_from_public_url(url)
    if path is None:
        logger.info(f"Skipping storage delete for foreign URL {url}")
        return
    delete_from_storage(path)


def generate_filename(ext: str) -> str:
    """Random object name, e.g. "<uuid4>.png"."""
    return f"{uuid.uuid4()}.{ext}"
