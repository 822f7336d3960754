"""
Bounds-safe geometric cropping for Pillow images.

Usage::

    from imgcrop import Anchor, Rect, crop_to_size, load_and_crop

    avatar = crop_to_size(img, 400, 400, Anchor.CENTER)
    banner = load_and_crop("photo.jpg", Rect(0, 100, 1920, 580))
"""

from imgcrop.engine import (
    crop,
    crop_by_margins,
    crop_to_center_square,
    crop_to_rectangle,
    crop_to_size,
    crop_to_square,
)
from imgcrop.errors import CropError, DecodeError
from imgcrop.image_io import (
    decode_image,
    encode_jpeg,
    encode_png,
    get_image_size,
    load_and_crop,
    open_image,
    save_image,
    unique_path,
)
from imgcrop.models import (
    Anchor,
    ExplicitRect,
    ImageView,
    Margins,
    Rect,
    SizeWithAnchor,
    clamp_rect,
    image_bounds,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "crop",
    "crop_by_margins",
    "crop_to_center_square",
    "crop_to_rectangle",
    "crop_to_size",
    "crop_to_square",
    # I/O
    "decode_image",
    "encode_jpeg",
    "encode_png",
    "get_image_size",
    "load_and_crop",
    "open_image",
    "save_image",
    "unique_path",
    # Models
    "Anchor",
    "ExplicitRect",
    "ImageView",
    "Margins",
    "Rect",
    "SizeWithAnchor",
    "clamp_rect",
    "image_bounds",
    # Errors
    "CropError",
    "DecodeError",
]
