"""
Image I/O boundary helpers.

Decodes files and streams into Pillow images (psd-tools for layered PSD
documents, Pillow for everything else), encodes JPEG and PNG, and wraps
the load-then-crop round trip.  Format detection is by content, never by
file extension.

Open and read failures propagate as the original ``OSError``.  Content
that cannot be decoded raises ``DecodeError``.
"""

import logging
import struct
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError
from psd_tools import PSDImage

from imgcrop.config import (
    JPEG_EXTENSIONS,
    JPEG_MODES,
    JPEG_QUALITY_DEFAULT,
    JPEG_QUALITY_MAX,
    MAX_IMAGE_PIXELS,
    PNG_COMPRESS_LEVEL,
    PNG_EXTENSIONS,
    PNG_MODES,
    PSD_SIGNATURE,
)
from imgcrop.engine import crop_to_rectangle
from imgcrop.errors import DecodeError
from imgcrop.models import Rect

logger = logging.getLogger(__name__)

Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

# Exceptions Pillow and psd-tools raise for malformed or short content.
# The stream is already open when these are caught, so OSError here means
# a truncated header or data section, not an unreadable file.
_DECODE_FAILURES = (OSError, SyntaxError, ValueError, EOFError, struct.error)

# signature, version, reserved, channels, height, width, depth, color mode
_PSD_HEADER = struct.Struct(">4sH6sHIIHH")
_PSD_RAW, _PSD_RLE = 0, 1


def _is_psd(stream: BinaryIO) -> bool:
    """Check the stream for a PSD signature without consuming it."""
    start = stream.tell()
    signature = stream.read(len(PSD_SIGNATURE))
    stream.seek(start)
    return signature == PSD_SIGNATURE


def _psd_required_length(data: bytes) -> int:
    """Number of bytes a PSD needs to hold its complete merged image.

    Walks the header, the three length-prefixed sections and the image
    data section.  Raw and RLE image data have an exact size; for ZIP
    compression only a non-empty payload can be checked.  Raises
    ``struct.error`` when the data ends inside a length field.
    """
    _, version, _, channels, height, width, depth, _ = _PSD_HEADER.unpack_from(data)
    offset = _PSD_HEADER.size

    # Color mode data, image resources, layer and mask info (8-byte length in PSB)
    for length_format in (">I", ">I", ">I" if version == 1 else ">Q"):
        (length,) = struct.unpack_from(length_format, data, offset)
        offset += struct.calcsize(length_format) + length

    (compression,) = struct.unpack_from(">H", data, offset)
    offset += 2
    rows = channels * height
    if compression == _PSD_RAW:
        return offset + rows * ((width * depth + 7) // 8)
    if compression == _PSD_RLE:
        count_format = f">{rows}{'H' if version == 1 else 'I'}"
        counts = struct.unpack_from(count_format, data, offset)
        return offset + struct.calcsize(count_format) + sum(counts)
    return offset + 1


def _decode_psd(stream: BinaryIO) -> Image.Image:
    """Composite a PSD document, rejecting truncated image data."""
    start = stream.tell()
    data = stream.read()
    stream.seek(start)
    try:
        required = _psd_required_length(data)
        if len(data) < required:
            raise DecodeError(
                f"Truncated PSD data: {len(data)} bytes, expected {required}"
            )
        return PSDImage.open(stream).composite()
    except _DECODE_FAILURES as exc:
        raise DecodeError(f"Invalid PSD data: {exc}") from exc


# =============================================================================
# Decoding
# =============================================================================
def decode_image(stream: BinaryIO) -> Image.Image:
    """Decode a seekable binary stream into a fully loaded image.

    Pixel data is read before returning, so the caller may close the
    stream as soon as this returns.

    Raises
    ------
    DecodeError
        The content is not a recognised raster format, or its pixel data
        is malformed or truncated.
    """
    if _is_psd(stream):
        return _decode_psd(stream)

    try:
        img = Image.open(stream)
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Unrecognised image format: {exc}") from exc
    except _DECODE_FAILURES as exc:
        raise DecodeError(f"Truncated or invalid image header: {exc}") from exc

    try:
        img.load()
    except _DECODE_FAILURES as exc:
        raise DecodeError(f"Invalid {img.format} data: {exc}") from exc
    return img


def open_image(path: str | Path) -> Image.Image:
    """Open and decode an image file.

    The file handle is closed on every exit path.  ``OSError`` from
    opening or reading the file propagates unchanged.
    """
    path = Path(path)
    try:
        with open(path, "rb") as fh:
            img = decode_image(fh)
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        raise
    except DecodeError as exc:
        logger.warning("Failed to decode %s: %s", path, exc)
        raise
    logger.debug("Opened %s (%s, %dx%d)", path, img.mode, img.width, img.height)
    return img


def get_image_size(path: str | Path) -> tuple[int, int]:
    """Get image dimensions without decoding pixel data.

    Only the header is read, so a file with truncated pixel data still
    reports its size here.
    """
    with open(path, "rb") as fh:
        if _is_psd(fh):
            try:
                psd = PSDImage.open(fh)
            except _DECODE_FAILURES as exc:
                raise DecodeError(f"Invalid PSD data: {exc}") from exc
            return psd.width, psd.height
        try:
            with Image.open(fh) as img:
                return img.size
        except UnidentifiedImageError as exc:
            raise DecodeError(f"Unrecognised image format: {exc}") from exc
        except _DECODE_FAILURES as exc:
            raise DecodeError(f"Truncated or invalid image header: {exc}") from exc


def load_and_crop(path: str | Path, rect: Rect) -> Image.Image:
    """Load an image file and crop it to *rect*.

    Nothing is cropped unless the file opens and decodes completely;
    there is no partial result.
    """
    return crop_to_rectangle(open_image(path), rect)


# =============================================================================
# Encoding
# =============================================================================
def encode_jpeg(
    img: Image.Image, sink: BinaryIO | str | Path, quality: int = JPEG_QUALITY_DEFAULT,
) -> None:
    """Write *img* to *sink* as JPEG.

    Quality outside ``(0, 100]`` falls back to the default of 85 rather
    than raising.  Modes JPEG cannot store (alpha, palette) are converted
    to RGB first.  Write failures propagate unchanged.
    """
    if not 0 < quality <= JPEG_QUALITY_MAX:
        logger.warning(
            "JPEG quality %r out of range, using %d", quality, JPEG_QUALITY_DEFAULT,
        )
        quality = JPEG_QUALITY_DEFAULT
    if img.mode not in JPEG_MODES:
        img = img.convert("RGB")
    img.save(sink, "JPEG", quality=quality)


def encode_png(img: Image.Image, sink: BinaryIO | str | Path) -> None:
    """Write *img* to *sink* as PNG.  Write failures propagate unchanged."""
    if img.mode not in PNG_MODES:
        img = img.convert("RGBA")
    img.save(sink, "PNG", compress_level=PNG_COMPRESS_LEVEL)


def unique_path(out_path: Path) -> Path:
    """Pick an unused output path for ``save_image(..., overwrite=False)``.

    *out_path* itself when it is free, else the first free
    ``<stem>-01<suffix>``, ``<stem>-02<suffix>``, ... beside it.
    """
    if not out_path.exists():
        return out_path
    counter = 1
    while True:
        candidate = out_path.with_name(f"{out_path.stem}-{counter:02d}{out_path.suffix}")
        if not candidate.exists():
            return candidate
        counter += 1


def save_image(
    img: Image.Image,
    path: str | Path,
    quality: int = JPEG_QUALITY_DEFAULT,
    overwrite: bool = True,
) -> Path:
    """Encode *img* to a file, choosing JPEG or PNG from the suffix.

    Parent directories are created as needed.  With ``overwrite=False`` an
    existing file is left alone and a ``-01``, ``-02``, ... variant of the
    name is used instead.  Returns the path actually written.
    """
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in JPEG_EXTENSIONS and ext not in PNG_EXTENSIONS:
        raise ValueError(f"Unsupported output format: {path.suffix!r}")

    path.parent.mkdir(parents=True, exist_ok=True)
    if not overwrite:
        path = unique_path(path)

    with open(path, "wb") as fh:
        if ext in JPEG_EXTENSIONS:
            encode_jpeg(img, fh, quality)
        else:
            encode_png(img, fh)
    logger.debug("Saved %dx%d image to %s", img.width, img.height, path)
    return path
