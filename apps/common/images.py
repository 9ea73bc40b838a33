import io
import hashlib
import logging
from datetime import datetime, timezone

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, ImageOps

from .errors import DependencyFailure

logger = logging.getLogger(__name__)


def content_hash(img: Image.Image) -> str:
    bio = io.BytesIO()
    # Hash pixels only so EXIF does not change the name
    ImageOps.exif_transpose(img).convert("RGB").save(bio, format="PNG")
    return hashlib.sha1(bio.getvalue()).hexdigest()


def sanitize(img: Image.Image) -> Image.Image:
    # Remove metadata/EXIF and normalize orientation
    return ImageOps.exif_transpose(img).convert("RGB")


def cover(img: Image.Image, width: int, height: int) -> Image.Image:
    """Center-crop to the target aspect ratio, then resize (crop: fill)."""
    return ImageOps.fit(img, (width, height), method=Image.Resampling.LANCZOS)


def save_jpeg(img: Image.Image, path: str, quality: int = 82) -> str:
    bio = io.BytesIO()
    img.save(bio, format="JPEG", optimize=True, progressive=True, quality=quality)
    bio.seek(0)
    return default_storage.save(path, ContentFile(bio.read()))


def build_upload_base(folder: str, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    y, m, d = now.strftime("%Y %m %d").split()
    return f"{folder}/{y}/{m}/{d}"


def process_menu_image(file_obj, now: datetime | None = None) -> dict:
    """Store a normalised copy of a menu photo and return its public URL."""
    width, height = getattr(settings, "MENU_IMAGE_SIZE", (800, 600))
    img = sanitize(Image.open(file_obj))
    h = content_hash(img)
    base = build_upload_base(getattr(settings, "MENU_IMAGE_FOLDER", "uploads/menu"), now)
    try:
        path = save_jpeg(cover(img, width, height), f"{base}/food-{h}.jpg")
        url = default_storage.url(path)
    except OSError as e:
        logger.exception("Image storage failed for %s", base)
        raise DependencyFailure("image storage failed") from e
    return {"url": url, "path": path, "hash": h}
