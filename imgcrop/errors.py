"""Exceptions raised by the I/O boundary helpers."""


class CropError(Exception):
    """Base class for imgcrop errors."""

    pass


class DecodeError(CropError):
    """Content could not be decoded as a supported raster format."""

    pass
