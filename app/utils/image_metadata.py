"""
Image metadata for postcard images.
PIL detects the format so stored blobs get the right content type and extension.
"""
from io import BytesIO
from typing import Any, Dict

from PIL import Image, UnidentifiedImageError

DEFAULT_IMAGE_CONTENT_TYPE = "image/png"

_FORMATS = {
    "PNG": ("image/png", ".png"),
    "JPEG": ("image/jpeg", ".jpg"),
    "WEBP": ("image/webp", ".webp"),
    "GIF": ("image/gif", ".gif"),
}


def extract_image_metadata(content: bytes) -> Dict[str, Any]:
    """
    Extract width, height, format, content_type, extension and size_kb from image bytes.
    Bytes PIL cannot identify, or whose dimensions trip the decompression-bomb
    limit, are reported as PNG with unknown dimensions.
    """
    size_kb = round(len(content) / 1024.0, 2)
    try:
        with Image.open(BytesIO(content)) as img:
            width, height = img.size
            fmt = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        return {
            "width": None,
            "height": None,
            "format": None,
            "content_type": DEFAULT_IMAGE_CONTENT_TYPE,
            "extension": ".png",
            "size_kb": size_kb,
        }

    content_type, extension = _FORMATS.get(fmt or "", (DEFAULT_IMAGE_CONTENT_TYPE, ".png"))
    return {
        "width": width,
        "height": height,
        "format": fmt,
        "content_type": content_type,
        "extension": extension,
        "size_kb": size_kb,
    }
