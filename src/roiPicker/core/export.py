"""Text renderings of hover readouts and committed selections."""

from __future__ import annotations

import json
from collections.abc import Sequence

from ..config import DISPLAY_PRECISION, EXPORT_FIELDS, EXPORT_JSON_INDENT, OUTSIDE_LABEL
from .coordinate_mapper import NormalizedPoint, PixelPoint
from .selection import HoverReading, SelectionBox


class ExportFormatter:
    """Serialise selections for copy-out and format values for display.

    ``format`` always emits full-precision values in the fixed field order so the
    output is byte-for-byte stable for a given selection.  The ``display_*``
    helpers round to ``precision`` decimals for on-screen panels only.
    """

    def __init__(
        self,
        *,
        indent: int = EXPORT_JSON_INDENT,
        precision: int = DISPLAY_PRECISION,
        fields: Sequence[str] = EXPORT_FIELDS,
    ) -> None:
        self._indent = int(indent)
        self._precision = int(precision)
        self._fields = tuple(fields)

    @property
    def precision(self) -> int:
        return self._precision

    def as_mapping(self, box: SelectionBox) -> dict[str, float]:
        """Return the normalised edges of *box* keyed in export order."""
        normalized = box.normalized
        return {name: float(getattr(normalized, name)) for name in self._fields}

    def format(self, box: SelectionBox | None) -> str:
        """Return the export text for *box*, or an empty string without one."""
        if box is None:
            return ""
        return json.dumps(self.as_mapping(box), indent=self._indent)

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------
    def display_value(self, value: float) -> str:
        return f"{value:.{self._precision}f}"

    def display_pixel(self, point: PixelPoint) -> str:
        return f"({point.x}, {point.y})"

    def display_normalized(self, point: NormalizedPoint) -> str:
        return f"({self.display_value(point.x)}, {self.display_value(point.y)})"

    def display_hover(self, reading: HoverReading | None) -> tuple[str, str]:
        """Return ``(pixel, normalized)`` labels for a hover reading."""
        if reading is None or reading.pixel is None or reading.normalized is None:
            return OUTSIDE_LABEL, OUTSIDE_LABEL
        return self.display_pixel(reading.pixel), self.display_normalized(reading.normalized)

    def display_box(self, box: SelectionBox) -> dict[str, tuple[int, str]]:
        """Return each box field as ``(pixels, rounded normalised text)``."""
        normalized = box.normalized
        rows: dict[str, tuple[int, str]] = {}
        for name in ("top", "left", "right", "bottom", "width", "height"):
            rows[name] = (int(getattr(box, name)), self.display_value(getattr(normalized, name)))
        return rows


__all__ = ["ExportFormatter"]
