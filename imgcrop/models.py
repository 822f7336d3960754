"""
Data models and crop-geometry utilities.

Rect, Anchor, ImageView and the three crop directives are the data
structures shared by the engine and the I/O helpers.  The helper functions
below resolve a directive to a concrete rectangle and clamp it to an
image's bounds; they are pure arithmetic and never touch pixel data.

Rectangles use the half-open convention: ``(x0, y0)`` is inclusive,
``(x1, y1)`` is exclusive, matching Pillow's crop box.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from PIL import Image

logger = logging.getLogger(__name__)


# =============================================================================
# Data classes
# =============================================================================
@dataclass(frozen=True)
class Rect:
    """Rectangle in image coordinates (min corner inclusive, max exclusive).

    Rects are stored exactly as given; an inverted rect (``x0 > x1``) is
    only normalised when clamped against image bounds.
    """
    x0: int = 0
    y0: int = 0
    x1: int = 0
    y1: int = 0

    @classmethod
    def from_xywh(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_box(self) -> tuple[int, int, int, int]:
        """Return ``(left, upper, right, lower)`` for ``Image.crop``."""
        return self.x0, self.y0, self.x1, self.y1

    def contains(self, other: "Rect") -> bool:
        return (
            self.x0 <= other.x0 <= other.x1 <= self.x1
            and self.y0 <= other.y0 <= other.y1 <= self.y1
        )


class Anchor(Enum):
    """Reference point used to place a fixed-size crop window."""
    CENTER = "Center"
    TOP_LEFT = "TopLeft"
    TOP_RIGHT = "TopRight"
    BOTTOM_LEFT = "BottomLeft"
    BOTTOM_RIGHT = "BottomRight"


@dataclass(frozen=True)
class ImageView:
    """An image placed at a non-zero origin in a larger coordinate space.

    Plain ``Image.Image`` objects have their origin at (0, 0).  A view
    shifts the bounds by ``(x, y)`` without copying pixels, so that
    ``image_bounds(view) == Rect(x, y, x + w, y + h)`` and view coordinate
    ``(x, y)`` addresses pixel (0, 0) of ``image``.
    """
    image: Image.Image
    x: int = 0
    y: int = 0

    @property
    def bounds(self) -> Rect:
        w, h = self.image.size
        return Rect(self.x, self.y, self.x + w, self.y + h)

    def getpixel(self, xy: tuple[int, int]):
        """Read a pixel addressed in view coordinates."""
        return self.image.getpixel((xy[0] - self.x, xy[1] - self.y))


# -----------------------------------------------------------------------------
# Crop directives
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExplicitRect:
    """Crop to an absolute rectangle."""
    rect: Rect


@dataclass(frozen=True)
class SizeWithAnchor:
    """Crop a ``width`` x ``height`` window positioned by ``anchor``."""
    width: int
    height: int
    anchor: Anchor | str = Anchor.CENTER


@dataclass(frozen=True)
class Margins:
    """Crop by removing the given thickness from each edge."""
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


CropDirective = ExplicitRect | SizeWithAnchor | Margins


# =============================================================================
# Crop math utilities
# =============================================================================
def image_bounds(src: Image.Image | ImageView) -> Rect:
    """Return the bounding rectangle of an image or image view."""
    if isinstance(src, ImageView):
        return src.bounds
    w, h = src.size
    return Rect(0, 0, w, h)


def clamp_rect(rect: Rect, bounds: Rect) -> Rect:
    """Clamp each edge of *rect* into *bounds*.

    The min corner is raised to the bounds minimum and the max corner is
    lowered to the bounds maximum.  Every coordinate is then held inside
    the bounds and the max corner is never left below the min corner, so
    the result is always contained in *bounds* and may be empty.
    """
    x0 = min(max(rect.x0, bounds.x0), bounds.x1)
    y0 = min(max(rect.y0, bounds.y0), bounds.y1)
    x1 = max(min(rect.x1, bounds.x1), x0)
    y1 = max(min(rect.y1, bounds.y1), y0)
    return Rect(x0, y0, x1, y1)


def parse_anchor(anchor: Anchor | str) -> Anchor | None:
    """Return the Anchor for *anchor*, or None if it names no anchor."""
    if isinstance(anchor, Anchor):
        return anchor
    try:
        return Anchor(anchor)
    except ValueError:
        return None


def anchor_offset(
    src_w: int, src_h: int, crop_w: int, crop_h: int, anchor: Anchor | str,
) -> tuple[int, int]:
    """Top-left offset of a ``crop_w`` x ``crop_h`` window inside the source.

    CENTER splits the slack with floor division, so an odd remainder
    leaves the extra pixel on the bottom/right side.

    Unrecognised anchors fall back to the TOP_LEFT offset ``(0, 0)``
    instead of raising.  Callers passing a misspelt anchor string get a
    top-left crop and a logged warning.
    """
    resolved = parse_anchor(anchor)
    dx = src_w - crop_w
    dy = src_h - crop_h
    if resolved is Anchor.CENTER:
        return dx // 2, dy // 2
    elif resolved is Anchor.TOP_LEFT:
        return 0, 0
    elif resolved is Anchor.TOP_RIGHT:
        return dx, 0
    elif resolved is Anchor.BOTTOM_LEFT:
        return 0, dy
    elif resolved is Anchor.BOTTOM_RIGHT:
        return dx, dy
    else:
        logger.warning("Unknown anchor %r, using top-left", anchor)
        return 0, 0


def size_rect(bounds: Rect, width: int, height: int, anchor: Anchor | str) -> Rect:
    """Rectangle of the requested size anchored inside *bounds*.

    Width and height are first limited to the bounds size; negative
    requests become zero.  The offset is relative to the bounds minimum.
    """
    w = max(0, min(width, bounds.width))
    h = max(0, min(height, bounds.height))
    x, y = anchor_offset(bounds.width, bounds.height, w, h, anchor)
    return Rect.from_xywh(bounds.x0 + x, bounds.y0 + y, w, h)


def margin_rect(bounds: Rect, top: int, right: int, bottom: int, left: int) -> Rect:
    """Rectangle left after removing margins from each edge (unvalidated)."""
    return Rect(
        bounds.x0 + left,
        bounds.y0 + top,
        bounds.x1 - right,
        bounds.y1 - bottom,
    )


def resolve_directive(directive: CropDirective, bounds: Rect) -> Rect:
    """Resolve a crop directive to an (unclamped) rectangle."""
    if isinstance(directive, ExplicitRect):
        return directive.rect
    if isinstance(directive, SizeWithAnchor):
        return size_rect(bounds, directive.width, directive.height, directive.anchor)
    if isinstance(directive, Margins):
        return margin_rect(
            bounds, directive.top, directive.right, directive.bottom, directive.left,
        )
    raise TypeError(f"Unsupported crop directive: {directive!r}")
