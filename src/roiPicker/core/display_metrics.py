"""
Contain-fit display metrics.

This module converts the natural size of an image and the size of the surface it
is painted on into the scale and letterbox offsets of a "contain" fit.  It has no
dependency on Qt so that hover and selection maths can be exercised headless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageDimensions:
    """Natural pixel size of the loaded image."""

    width: int
    height: int

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class ContainerGeometry:
    """On-screen size of the display surface in logical pixels."""

    width: float
    height: float


EMPTY_IMAGE = ImageDimensions(0, 0)
EMPTY_CONTAINER = ContainerGeometry(0.0, 0.0)


@dataclass(frozen=True)
class DisplayMetrics:
    """Rendered image area inside the container.

    ``scale_x``/``scale_y`` are the display-to-image multipliers, i.e. the inverse
    of the factor applied when painting the image.
    """

    rendered_width: float
    rendered_height: float
    offset_x: float
    offset_y: float
    scale_x: float
    scale_y: float

    @property
    def display_scale(self) -> float:
        """Return the image-to-display factor (0 when nothing is rendered)."""
        if self.scale_x > 0.0:
            return 1.0 / self.scale_x
        return 0.0


def _degenerate(container: ContainerGeometry) -> DisplayMetrics:
    width = max(0.0, float(container.width))
    height = max(0.0, float(container.height))
    return DisplayMetrics(
        rendered_width=width,
        rendered_height=height,
        offset_x=0.0,
        offset_y=0.0,
        scale_x=1.0 if width > 0.0 else 0.0,
        scale_y=1.0 if height > 0.0 else 0.0,
    )


def compute_display_metrics(
    image: ImageDimensions,
    container: ContainerGeometry,
) -> DisplayMetrics:
    """Return the contain-fit metrics of *image* painted inside *container*.

    Parameters
    ----------
    image:
        Natural size of the image.  Non-positive dimensions mean no image is
        loaded yet.
    container:
        Size of the surface the image is drawn on.

    Returns
    -------
    DisplayMetrics:
        The rendered size, centering offsets and inverse scale factors.  When
        either input is degenerate the rendered area equals the container and
        the scale is inert (1, or 0 for a collapsed axis).
    """
    img_w = int(image.width)
    img_h = int(image.height)
    view_w = float(container.width)
    view_h = float(container.height)
    if img_w <= 0 or img_h <= 0 or view_w <= 0.0 or view_h <= 0.0:
        _LOGGER.debug(
            "Degenerate display metrics for image %dx%d in %.1fx%.1f",
            img_w,
            img_h,
            view_w,
            view_h,
        )
        return _degenerate(container)

    scale = min(view_w / float(img_w), view_h / float(img_h))
    rendered_w = img_w * scale
    rendered_h = img_h * scale
    return DisplayMetrics(
        rendered_width=rendered_w,
        rendered_height=rendered_h,
        offset_x=(view_w - rendered_w) / 2.0,
        offset_y=(view_h - rendered_h) / 2.0,
        scale_x=img_w / rendered_w if rendered_w > 0.0 else 0.0,
        scale_y=img_h / rendered_h if rendered_h > 0.0 else 0.0,
    )


__all__ = [
    "ContainerGeometry",
    "DisplayMetrics",
    "EMPTY_CONTAINER",
    "EMPTY_IMAGE",
    "ImageDimensions",
    "compute_display_metrics",
]
