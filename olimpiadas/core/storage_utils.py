# olimpiadas/core/storage_utils.py
"""
Supabase Storage helpers for payment proofs.

Receipts are stored in the PAYMENT_PROOF_BUCKET bucket under
<event_id>/<user_id>/<random>.<ext>. The service-role client is built on
first use, so importing this module does not require the key.
"""

import uuid
from functools import lru_cache

from supabase import Client, create_client

from olimpiadas.core.config import get_settings

settings = get_settings()

# content-type -> file extension accepted for payment proofs
ALLOWED_PROOF_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@lru_cache
def storage_client() -> Client:
    """
    Supabase client authenticated with the service role key (bypasses RLS).

    Never expose this key to the frontend.

    Raises:
        RuntimeError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


def _proof_bucket():
    return storage_client().storage.from_(settings.PAYMENT_PROOF_BUCKET)


def proof_path(event_id: uuid.UUID, user_id: uuid.UUID, ext: str) -> str:
    """Object path for a new receipt, e.g. "<event>/<user>/<uuid4>.pdf"."""
    return f"{event_id}/{user_id}/{uuid.uuid4()}.{ext}"


def upload_proof(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload a receipt and return its public URL.

    An object already stored at `path` is overwritten (upsert).

    Raises:
        Any exception raised by the Supabase client if the upload fails.
    """
    bucket = _proof_bucket()
    bucket.upload(
        path,
        file_bytes,
        {"upsert": "true", "content-type": content_type},
    )
    return bucket.get_public_url(path)


def delete_proof(path: str) -> None:
    _proof_bucket().remove([path])


def proof_path_from_url(url: str) -> str | None:
    """
    Object path of a public receipt URL, or None for URLs outside the bucket.

        https://<proj>.supabase.co/storage/v1/object/public/comprovantes/e/u/x.pdf
        -> "e/u/x.pdf"
    """
    marker = f"/storage/v1/object/public/{settings.PAYMENT_PROOF_BUCKET}/"
    _, found, path = url.partition(marker)
    return path if found and path else None


def delete_proof_url(url: str) -> None:
    """Delete a receipt by its public URL. No-op for foreign URLs."""
    path = proof_path_from_url(url)
    if path:
        delete_proof(path)
