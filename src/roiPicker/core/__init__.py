"""
Coordinate mapping and rectangle selection engine.

The modules in this package are pure Python and never import Qt, so the same
engine backs the desktop viewer, the command line helpers and the tests.
"""

from .coordinate_mapper import CoordinateMapper, DisplayPoint, NormalizedPoint, PixelPoint
from .display_metrics import (
    ContainerGeometry,
    DisplayMetrics,
    ImageDimensions,
    compute_display_metrics,
)
from .export import ExportFormatter
from .selection import (
    HoverReading,
    NormalizedBox,
    Rectangle,
    SelectionBox,
    SelectionController,
    SelectionState,
)

__all__ = [
    "ContainerGeometry",
    "CoordinateMapper",
    "DisplayMetrics",
    "DisplayPoint",
    "ExportFormatter",
    "HoverReading",
    "ImageDimensions",
    "NormalizedBox",
    "NormalizedPoint",
    "PixelPoint",
    "Rectangle",
    "SelectionBox",
    "SelectionController",
    "SelectionState",
    "compute_display_metrics",
]
