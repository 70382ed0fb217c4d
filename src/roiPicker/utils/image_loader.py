"""Helpers for loading Qt image primitives with Pillow fallbacks."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError
from PIL.ImageQt import ImageQt
from PySide6.QtGui import QImage, QImageReader

from ..config import SUPPORTED_IMAGE_SUFFIXES
from ..core.display_metrics import ImageDimensions
from ..errors import ImageLoadError, UnsupportedImageError

_LOGGER = logging.getLogger(__name__)


def is_supported_image(source: Path) -> bool:
    """Return True when *source* has one of the supported image extensions."""

    return Path(source).suffix.lower() in SUPPORTED_IMAGE_SUFFIXES


def dimensions_of(image: QImage) -> ImageDimensions:
    """Return the natural size of *image* as :class:`ImageDimensions`."""

    return ImageDimensions(int(image.width()), int(image.height()))


def load_qimage(source: Path) -> QImage:
    """Decode *source* into a :class:`QImage` at its natural resolution.

    ``QImageReader`` is tried first because it streams from the filename and
    applies EXIF orientation; Pillow is used when Qt lacks a suitable plugin.

    Raises
    ------
    UnsupportedImageError:
        The extension is not a supported image format.
    ImageLoadError:
        The file is missing or neither decoder could read it.
    """

    path = Path(source)
    if not is_supported_image(path):
        raise UnsupportedImageError(f"Unsupported image type: {path.suffix or path.name}")
    if not path.is_file():
        raise ImageLoadError(f"Image not found: {path}")

    reader = QImageReader(str(path))
    reader.setAutoTransform(True)
    image = reader.read()
    if not image.isNull():
        _LOGGER.info("Loaded %s (%dx%d)", path.name, image.width(), image.height())
        return image

    _LOGGER.debug("Qt could not decode %s (%s); trying Pillow", path, reader.errorString())
    return _load_with_pillow(path)


def _load_with_pillow(source: Path) -> QImage:
    try:
        with Image.open(source) as img:
            img = ImageOps.exif_transpose(img)
            qt_image = ImageQt(img.convert("RGBA"))
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageLoadError(f"Unable to read image {source}: {exc}") from exc
    image = qt_image.copy()
    if image.isNull():
        raise ImageLoadError(f"Unable to decode image {source}")
    _LOGGER.info("Loaded %s with Pillow (%dx%d)", source.name, image.width(), image.height())
    return image


__all__ = ["dimensions_of", "is_supported_image", "load_qimage"]
