from __future__ import annotations

import logging
import os

from PIL import Image, UnidentifiedImageError

from .carrier import ArrayCarrier
from .errors import CarrierLoadError, OutputWriteError, SecretReadError, UnsupportedFormatError

logger = logging.getLogger(__name__)

# Formats that keep every channel value exactly as written.
LOSSLESS_FORMATS = ("PNG", "BMP", "TIFF")
LOSSY_FORMATS = ("JPEG", "MPO")

_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".bmp": "BMP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}


def format_for_path(path, fmt: str | None = None) -> str:
    if fmt:
        fmt = fmt.upper()
    else:
        ext = os.path.splitext(str(path))[1].lower()
        fmt = _SUFFIX_FORMATS.get(ext)
        if fmt is None:
            raise UnsupportedFormatError(ext or "<none>",
                                         f"Cannot infer a lossless format from '{path}'; use .png, .bmp or .tiff")
    if fmt not in LOSSLESS_FORMATS:
        raise UnsupportedFormatError(fmt, f"Output format {fmt} does not preserve LSBs; use one of {', '.join(LOSSLESS_FORMATS)}")
    return fmt


def load_carrier(path, allow_lossy: bool = False) -> ArrayCarrier:
    try:
        with Image.open(path) as img:
            if img.format in LOSSY_FORMATS and not allow_lossy:
                raise CarrierLoadError(path, f"{img.format} is lossy; its LSBs cannot be trusted")
            carrier = ArrayCarrier.from_image(img)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as e:
        raise CarrierLoadError(path, e) from e
    logger.info("Loaded carrier %s (%dx%d)", path, carrier.width, carrier.height)
    return carrier


def save_carrier(carrier: ArrayCarrier, path, fmt: str | None = None) -> None:
    fmt = format_for_path(path, fmt)
    try:
        carrier.to_image().save(path, format=fmt)
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logger.info("Wrote %s image %s", fmt, path)


def read_secret(path) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise SecretReadError(path, e) from e


def write_secret(path, data: bytes) -> None:
    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise OutputWriteError(path, e) from e
