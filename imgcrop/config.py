"""
Library constants.

Encoder defaults, the Pillow decompression-bomb limit, and the file
signatures and extensions the I/O helpers dispatch on.  Everything here is
a plain module constant; callers that need different values pass them as
arguments instead of mutating this module.
"""

# Allow very large images (Pillow's default limit is ~178MP).
# Applied to ``PIL.Image.MAX_IMAGE_PIXELS`` when ``image_io`` is imported.
MAX_IMAGE_PIXELS = None

# =============================================================================
# ENCODERS
# =============================================================================
# JPEG quality; anything outside (0, 100] falls back to the default
JPEG_QUALITY_DEFAULT = 85
JPEG_QUALITY_MAX = 100

# Modes the JPEG encoder accepts as-is; everything else is converted to RGB
JPEG_MODES = {"RGB", "L", "CMYK"}

# Modes the PNG encoder accepts as-is; everything else is converted to RGBA
PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}

# PNG compression level (0-9, 9 = maximum compression)
PNG_COMPRESS_LEVEL = 6

# =============================================================================
# FILE FORMATS
# =============================================================================
JPEG_EXTENSIONS = {".jpg", ".jpeg"}
PNG_EXTENSIONS = {".png"}

# Photoshop documents start with this signature
PSD_SIGNATURE = b"8BPS"
