"""
Crop engine.

Every operation resolves its arguments to a rectangle, clamps it to the
source bounds and copies that region into a freshly allocated image.  The
source is only read; the result always has its origin at (0, 0).  Nothing
here raises for bad geometry: oversized, inverted or out-of-bounds
requests are clamped and may produce an empty image.
"""

import logging

from PIL import Image

from imgcrop.models import (
    Anchor,
    CropDirective,
    ImageView,
    Rect,
    clamp_rect,
    image_bounds,
    margin_rect,
    resolve_directive,
    size_rect,
)

logger = logging.getLogger(__name__)


def crop_to_rectangle(src: Image.Image | ImageView, rect: Rect) -> Image.Image:
    """Copy the part of *src* covered by *rect* into a new image.

    *rect* is in the source's coordinate space and may lie partly or
    entirely outside it.  Output pixel (0, 0) is the source pixel at the
    clamped rect's min corner.  The source mode (and palette) is kept.
    """
    bounds = image_bounds(src)
    clamped = clamp_rect(rect, bounds)
    if isinstance(src, ImageView):
        image = src.image
        local = Rect(
            clamped.x0 - src.x, clamped.y0 - src.y,
            clamped.x1 - src.x, clamped.y1 - src.y,
        )
    else:
        image = src
        local = clamped

    logger.debug("Crop %s -> %s (bounds %s)", rect, clamped, bounds)

    if clamped.is_empty:
        empty = Image.new(image.mode, clamped.size)
        if image.palette is not None:
            rawmode = image.palette.mode
            empty.putpalette(image.getpalette(rawmode), rawmode)
        return empty
    # Image.crop copies the region; the source is left untouched
    return image.crop(local.as_box())


def crop_to_size(
    src: Image.Image | ImageView, width: int, height: int, anchor: Anchor | str,
) -> Image.Image:
    """Crop a window of at most ``width`` x ``height`` positioned by *anchor*.

    Requested sizes larger than the source are limited to the source
    size.  An unrecognised anchor behaves like ``Anchor.TOP_LEFT``.
    """
    rect = size_rect(image_bounds(src), width, height, anchor)
    return crop_to_rectangle(src, rect)


def crop_to_square(src: Image.Image | ImageView, anchor: Anchor | str) -> Image.Image:
    """Crop the largest square (side = shorter dimension) at *anchor*."""
    w, h = image_bounds(src).size
    size = min(w, h)
    return crop_to_size(src, size, size, anchor)


def crop_to_center_square(src: Image.Image | ImageView) -> Image.Image:
    return crop_to_square(src, Anchor.CENTER)


def crop_by_margins(
    src: Image.Image | ImageView, top: int, right: int, bottom: int, left: int,
) -> Image.Image:
    """Remove the given number of pixels from each edge.

    Margins are not validated.  Margins that meet or cross produce an
    empty image; negative margins are trimmed back to the source bounds.
    """
    rect = margin_rect(image_bounds(src), top, right, bottom, left)
    return crop_to_rectangle(src, rect)


def crop(src: Image.Image | ImageView, directive: CropDirective) -> Image.Image:
    """Apply an ExplicitRect, SizeWithAnchor or Margins directive."""
    rect = resolve_directive(directive, image_bounds(src))
    return crop_to_rectangle(src, rect)
