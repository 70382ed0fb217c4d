"""
Pointer to image coordinate conversion.

All functions here are pure: they never raise for out-of-range input and instead
clamp to the nearest valid coordinate.  Pointer positions are expressed in
container-local pixels, i.e. relative to the top-left corner of the surface the
image is letterboxed into.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .display_metrics import DisplayMetrics, ImageDimensions


@dataclass(frozen=True)
class PixelPoint:
    """Zero-based pixel index in image space."""

    x: int
    y: int


@dataclass(frozen=True)
class NormalizedPoint:
    """Image-space point divided by the image dimensions."""

    x: float
    y: float


@dataclass(frozen=True)
class DisplayPoint:
    """Container-local point in on-screen pixels."""

    x: float
    y: float


def _round_half_up(value: float) -> int:
    # Pointer maths only ever rounds non-negative values.
    return int(math.floor(value + 0.5))


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _clamp_index(value: int, size: int) -> int:
    # ``size - 1`` may be negative when no image is loaded; the outer max wins.
    return max(0, min(size - 1, value))


@dataclass(frozen=True)
class CoordinateMapper:
    """Map between container-local pointer positions and image pixels.

    Instances are cheap snapshots of the current image size and display metrics;
    callers create a new mapper whenever either changes.
    """

    image: ImageDimensions
    metrics: DisplayMetrics

    # ------------------------------------------------------------------
    # Display -> image
    # ------------------------------------------------------------------
    def relative_position(self, pointer_x: float, pointer_y: float) -> tuple[float, float]:
        """Return the pointer position relative to the rendered image area."""
        return (
            float(pointer_x) - self.metrics.offset_x,
            float(pointer_y) - self.metrics.offset_y,
        )

    def is_within_rendered_bounds(self, pointer_x: float, pointer_y: float) -> bool:
        """Return True when the pointer lies over the rendered image (edges included)."""
        rel_x, rel_y = self.relative_position(pointer_x, pointer_y)
        return (
            0.0 <= rel_x <= self.metrics.rendered_width
            and 0.0 <= rel_y <= self.metrics.rendered_height
        )

    def clamp_to_rendered(self, pointer_x: float, pointer_y: float) -> tuple[float, float]:
        """Return the rendered-area relative position clamped to the image edges."""
        rel_x, rel_y = self.relative_position(pointer_x, pointer_y)
        return (
            _clamp(rel_x, 0.0, self.metrics.rendered_width),
            _clamp(rel_y, 0.0, self.metrics.rendered_height),
        )

    def rendered_to_image(self, rel_x: float, rel_y: float) -> PixelPoint:
        """Project a rendered-area relative position onto the image pixel grid."""
        metrics = self.metrics
        clamped_x = _clamp(float(rel_x), 0.0, metrics.rendered_width)
        clamped_y = _clamp(float(rel_y), 0.0, metrics.rendered_height)
        scale_x = metrics.scale_x or 1.0
        scale_y = metrics.scale_y or 1.0
        return PixelPoint(
            _clamp_index(_round_half_up(clamped_x * scale_x), int(self.image.width)),
            _clamp_index(_round_half_up(clamped_y * scale_y), int(self.image.height)),
        )

    def to_image_point(self, pointer_x: float, pointer_y: float) -> PixelPoint:
        """Return the image pixel under the pointer, clamped to the image grid."""
        rel_x, rel_y = self.relative_position(pointer_x, pointer_y)
        return self.rendered_to_image(rel_x, rel_y)

    def to_normalized_point(self, point: PixelPoint) -> NormalizedPoint:
        """Return *point* divided by the image dimensions."""
        width = int(self.image.width)
        height = int(self.image.height)
        return NormalizedPoint(
            point.x / width if width > 0 else 0.0,
            point.y / height if height > 0 else 0.0,
        )

    # ------------------------------------------------------------------
    # Image -> display
    # ------------------------------------------------------------------
    def image_to_rendered(self, image_x: float, image_y: float) -> tuple[float, float]:
        """Return the rendered-area relative position of an image coordinate."""
        metrics = self.metrics
        rel_x = float(image_x) / metrics.scale_x if metrics.scale_x > 0.0 else 0.0
        rel_y = float(image_y) / metrics.scale_y if metrics.scale_y > 0.0 else 0.0
        return rel_x, rel_y

    def to_display_point(self, image_x: float, image_y: float) -> DisplayPoint:
        """Return the container-local position of an image coordinate."""
        rel_x, rel_y = self.image_to_rendered(image_x, image_y)
        return DisplayPoint(rel_x + self.metrics.offset_x, rel_y + self.metrics.offset_y)


__all__ = ["CoordinateMapper", "DisplayPoint", "NormalizedPoint", "PixelPoint"]
