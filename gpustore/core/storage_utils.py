# gpustore/core/storage_utils.py
import logging
import re
import uuid
from pathlib import Path

from gpustore.core.config import get_settings

logger = logging.getLogger(__name__)


def images_dir() -> Path:
    """
    Directory holding uploaded video card images.
    Created on demand.
    """
    path = get_settings().images_dir
    path.mkdir(parents=True, exist_ok=True)
    return path


def generate_filename(original_name: str, ext: str) -> str:
    """
    Generate a unique filename that keeps the original name readable.

    The client's extension is replaced by `ext`, the one derived from
    the validated content type.

    Example:
        ("rtx 4090.jpeg", "jpg") -> "<uuid4>_rtx_4090.jpg"
    """
    stem = Path(original_name or "image").stem
    stem = re.sub(r"[^A-Za-z0-9_-]+", "_", stem).strip("_-") or "image"
    return f"{uuid.uuid4()}_{stem}.{ext}"


def save_image(filename: str, file_bytes: bytes) -> str:
    """
    Write an image into the images directory.

    Returns:
        The filename (what the video card stores).
    """
    (images_dir() / filename).write_bytes(file_bytes)
    return filename


def delete_image(filename: str) -> None:
    """
    Best-effort removal of a stored image.
    Missing files and filenames escaping the directory are ignored.
    """
    root = images_dir().resolve()
    path = (root / filename).resolve()
    if path.parent != root:
        logger.warning("Refusing to delete image outside images dir: %s", filename)
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not delete image %s: %s", filename, exc)
