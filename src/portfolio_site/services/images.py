"""Image normalisation and JPEG encoding for background uploads."""

import io
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

CURRENT_JPEG_QUALITY = 82
BACKUP_JPEG_QUALITY = 100


class ImageProcessingError(RuntimeError):
    """Raised when uploaded bytes cannot be decoded as an image."""


@dataclass(frozen=True)
class ProcessedImage:
    """The two derived variants of an uploaded image."""

    current: bytes
    backup: bytes
    width: int
    height: int


def process_upload(data: bytes, max_width: int) -> ProcessedImage:
    """Produce the web-sized current variant and the full-quality backup.

    Orientation is applied from EXIF; no other metadata reaches either
    encoded variant.
    """
    image = _load_oriented(data)
    current = image
    if image.width > max_width:
        height = max(1, round(image.height * max_width / image.width))
        current = image.resize((max_width, height), Image.LANCZOS)
    return ProcessedImage(
        current=_encode_jpeg(
            current,
            quality=CURRENT_JPEG_QUALITY,
            progressive=True,
            optimize=True,
            subsampling="4:2:0",
        ),
        backup=_encode_jpeg(
            image,
            quality=BACKUP_JPEG_QUALITY,
            progressive=False,
            optimize=False,
            subsampling="4:4:4",
        ),
        width=current.width,
        height=current.height,
    )


def _load_oriented(data: bytes) -> Image.Image:
    try:
        with Image.open(io.BytesIO(data)) as source:
            oriented = ImageOps.exif_transpose(source)
            oriented.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageProcessingError(f"Could not read image: {exc}") from exc
    if oriented.mode != "RGB":
        oriented = oriented.convert("RGB")
    return oriented


def _encode_jpeg(
    image: Image.Image,
    *,
    quality: int,
    progressive: bool,
    optimize: bool,
    subsampling: str,
) -> bytes:
    buffer = io.BytesIO()
    image.save(
        buffer,
        "JPEG",
        quality=quality,
        progressive=progressive,
        optimize=optimize,
        subsampling=subsampling,
    )
    return buffer.getvalue()
