"""
Project: Café Menu Service

Description:
Image ingestion: validation, compression / re-encoding with Pillow, and the
validate -> compress -> upload sequence used by the admin dashboard.
"""

import io
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
)
MAX_IMAGE_BYTES = 5 * 1024 * 1024

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload an image (JPEG, PNG, GIF, WebP, or SVG)"
TOO_LARGE_MESSAGE = "File too large. Maximum size is 5MB"
CLIENT_TOO_LARGE_MESSAGE = "File too large. Maximum size is 5MB before compression"
NO_FILE_MESSAGE = "No file provided"

SVG_TYPE = "image/svg+xml"
REENCODE_QUALITY = 0.8
MAX_COMPRESS_ITERATIONS = 10
MIN_QUALITY = 0.3

_PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
    "image/gif": "GIF",
}


class ImageIngestionError(Exception):
    pass


@dataclass
class ImageFile:
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass
class CompressionOptions:
    max_size_mb: float = 0.7
    max_width_or_height: int = 2400
    file_type: str = "image/jpeg"
    quality: float = REENCODE_QUALITY

    @property
    def max_bytes(self) -> int:
        return int(self.max_size_mb * 1024 * 1024)


def validate_image_file(image: ImageFile, too_large_message: str = TOO_LARGE_MESSAGE) -> ValidationResult:
    """Check MIME type and size; returns the user-facing reason on rejection."""
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        return ValidationResult(False, INVALID_TYPE_MESSAGE)
    if image.size > MAX_IMAGE_BYTES:
        return ValidationResult(False, too_large_message)
    return ValidationResult(True)


def extension_for(content_type: str) -> str:
    return "webp" if content_type == "image/webp" else "jpg"


def rename_with_extension(name: str, ext: str) -> str:
    if re.search(r"\.[^.]+$", name):
        return re.sub(r"\.[^.]+$", f".{ext}", name)
    return f"{name}.{ext}"


def _open(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return ImageOps.exif_transpose(img)


def _encode(img: Image.Image, content_type: str, quality: float) -> bytes:
    fmt = _PIL_FORMATS.get(content_type, "JPEG")
    if fmt == "JPEG" and img.mode != "RGB":
        # JPEG has no alpha channel, flatten onto white
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        img = background
    elif fmt == "WEBP" and img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA")

    buffer = io.BytesIO()
    params = {}
    if fmt in ("JPEG", "WEBP"):
        params["quality"] = max(1, min(95, int(round(quality * 100))))
    if fmt == "JPEG":
        params["optimize"] = True
    img.save(buffer, format=fmt, **params)
    return buffer.getvalue()


def _reencode(data: bytes, target_type: str, quality: float = REENCODE_QUALITY) -> bytes:
    return _encode(_open(data), target_type, quality)


def _bounded_compress(image: ImageFile, options: CompressionOptions):
    """
    Shrink until the encoded size fits options.max_bytes.

    JPEG and WebP sources keep their encoding, everything else comes out as
    JPEG. Returns (data, content_type).
    """
    out_type = image.content_type if image.content_type in ("image/jpeg", "image/webp") else "image/jpeg"
    img = _open(image.data)

    edge = options.max_width_or_height
    if max(img.size) > edge:
        img.thumbnail((edge, edge), Image.Resampling.LANCZOS)

    quality = options.quality
    data = _encode(img, out_type, quality)
    iterations = 0
    while len(data) > options.max_bytes and iterations < MAX_COMPRESS_ITERATIONS:
        iterations += 1
        quality = max(MIN_QUALITY, quality * 0.9)
        width, height = img.size
        img = img.resize((max(1, int(width * 0.9)), max(1, int(height * 0.9))), Image.Resampling.LANCZOS)
        data = _encode(img, out_type, quality)

    if len(data) > options.max_bytes:
        logger.warning("Compressed %s is still %d bytes after %d passes", image.name, len(data), iterations)
    return data, out_type


def compress_image(image: ImageFile, options: Optional[CompressionOptions] = None) -> ImageFile:
    """
    Compress and re-encode an image before upload.

    - Below the size threshold and already in the target encoding: returned
      unchanged (same object).
    - Below the threshold in another encoding: re-encoded to the target at
      quality 0.8.
    - At or above the threshold: run through the bounded compressor, then
      re-encoded once more if the compressor's encoding is not the target.

    SVG is never re-encoded. Decode/encode failures raise ImageIngestionError.
    """
    options = options or CompressionOptions()
    target = options.file_type or "image/jpeg"

    if image.content_type == SVG_TYPE:
        return image

    new_name = rename_with_extension(image.name, extension_for(target))
    try:
        if image.size < options.max_bytes:
            if image.content_type == target:
                return image
            return ImageFile(new_name, target, _reencode(image.data, target))

        data, out_type = _bounded_compress(image, options)
        if out_type != target:
            data = _reencode(data, target)
        return ImageFile(new_name, target, data)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.error("Image compression failed for %s: %s", image.name, e)
        raise ImageIngestionError(f"Failed to compress image: {e}") from e


def ingest_image(
    image: Optional[ImageFile],
    upload: Callable[[ImageFile], str],
    options: Optional[CompressionOptions] = None,
) -> str:
    """Validate, compress and upload an image; returns the stored URL."""
    if image is None:
        raise ImageIngestionError(NO_FILE_MESSAGE)

    # checked before compression, the server checks the compressed upload again
    result = validate_image_file(image, CLIENT_TOO_LARGE_MESSAGE)
    if not result.is_valid:
        raise ImageIngestionError(result.error)

    compressed = compress_image(image, options)
    logger.info(
        "Image compression: %.2fMB -> %.2fMB",
        image.size / 1024 / 1024,
        compressed.size / 1024 / 1024,
    )

    try:
        url = upload(compressed)
    except ImageIngestionError:
        raise
    except Exception as e:
        raise ImageIngestionError(str(e) or "Failed to upload image") from e

    if not url:
        raise ImageIngestionError("Upload did not return an image URL")
    return url
