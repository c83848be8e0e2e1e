import logging
import os
import uuid

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from core.config import settings
from core.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic", ".heif")

CHUNK_SIZE = 1024 * 1024


def upload_path(stored_name: str) -> str:
    return os.path.join(settings.UPLOADS_DIR, os.path.basename(stored_name))


def check_image_upload(upload: UploadFile) -> str:
    """Return the lower-cased extension of an allowed image upload."""
    ext = os.path.splitext(upload.filename or "")[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError("Only image files are allowed")
    return ext


def _compress_image(file_path: str, ext: str, size_bytes: int) -> int:
    """Re-encode in the same format, keeping the result only if it is smaller."""
    try:
        with Image.open(file_path) as img:
            tmp_path = file_path + ".tmp"
            save_kwargs = {}
            if ext in (".jpg", ".jpeg"):
                if img.mode in ("RGBA", "P"):
                    img = img.convert("RGB")
                save_kwargs = {"format": "JPEG", "quality": 85, "optimize": True, "progressive": True}
            elif ext == ".png":
                # Preserve PNG but try strongest compression
                save_kwargs = {"format": "PNG", "optimize": True, "compress_level": 9}
            elif ext == ".webp":
                save_kwargs = {"format": "WEBP", "quality": 85, "method": 6}

            if not save_kwargs:
                return size_bytes

            img.save(tmp_path, **save_kwargs)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        # HEIC, damaged and oversized-dimension files stay as uploaded
        logger.debug("Skipping compression for %s: %s", file_path, e)
        remove_upload(file_path + ".tmp")
        return size_bytes

    new_size = os.path.getsize(tmp_path)
    if new_size < size_bytes:
        os.replace(tmp_path, file_path)
        return new_size
    os.remove(tmp_path)
    return size_bytes


def save_image_upload(upload: UploadFile, prefix: str = "") -> str:
    """Stream an image upload to disk under a generated name and return that name.

    The client's file name only contributes its extension.
    """
    ext = check_image_upload(upload)
    os.makedirs(settings.UPLOADS_DIR, exist_ok=True)

    stored_name = f"{prefix}{uuid.uuid4()}{ext}"
    file_path = upload_path(stored_name)

    # Stream to disk to avoid high memory usage
    size_bytes = 0
    with open(file_path, "wb") as out:
        while True:
            chunk = upload.file.read(CHUNK_SIZE)
            if not chunk:
                break
            size_bytes += len(chunk)
            if size_bytes > settings.MAX_UPLOAD_BYTES:
                break
            out.write(chunk)

    if size_bytes > settings.MAX_UPLOAD_BYTES:
        remove_upload(stored_name)
        raise ValidationError(f"File exceeds the {settings.MAX_UPLOAD_MB}MB limit")

    try:
        size_bytes = _compress_image(file_path, ext, size_bytes)
    except Exception:
        remove_upload(stored_name)
        raise
    logger.info("Stored upload %s (%d bytes)", stored_name, size_bytes)
    return stored_name


def save_image_uploads(uploads: list[UploadFile], prefix: str = "") -> list[str]:
    """Store a batch of uploads; a failure removes what this batch already wrote."""
    for upload in uploads:
        check_image_upload(upload)

    stored: list[str] = []
    try:
        for upload in uploads:
            stored.append(save_image_upload(upload, prefix=prefix))
    except Exception:
        for name in stored:
            remove_upload(name)
        raise
    return stored


def remove_upload(stored_name: str) -> bool:
    """Best-effort removal of a stored upload; a missing file is not an error."""
    if not stored_name:
        return False
    path = upload_path(stored_name)
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not remove upload %s: %s", path, e)
        return False
