"""Side panel showing hover coordinates, the selection box and its export text."""

from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import (
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QLabel,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from ....config import OUTSIDE_LABEL
from ....core.display_metrics import ImageDimensions
from ....core.selection import HoverReading, SelectionBox
from ...viewmodels.roi_viewmodel import RoiViewModel

_BOX_FIELDS = ("top", "left", "right", "bottom", "width", "height")


class CoordinatePanel(QWidget):
    """Read-only coordinate readouts bound to a :class:`RoiViewModel`."""

    def __init__(self, view_model: RoiViewModel, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("coordinatePanel")
        self.setMinimumWidth(240)
        self._view_model = view_model

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(10)

        info_group = QGroupBox("Image", self)
        info_form = QFormLayout(info_group)
        self.dimensions_label = QLabel("—", info_group)
        self.hover_pixel_label = QLabel(OUTSIDE_LABEL, info_group)
        self.hover_normalized_label = QLabel(OUTSIDE_LABEL, info_group)
        info_form.addRow("Dimensions:", self.dimensions_label)
        info_form.addRow("Pixel:", self.hover_pixel_label)
        info_form.addRow("Normalized:", self.hover_normalized_label)
        layout.addWidget(info_group)

        self._box_group = QGroupBox("Rectangle", self)
        grid = QGridLayout(self._box_group)
        grid.addWidget(QLabel("<b>Pixels</b>", self._box_group), 0, 1)
        grid.addWidget(QLabel("<b>Normalized</b>", self._box_group), 0, 2)
        self._box_labels: dict[str, tuple[QLabel, QLabel]] = {}
        for row, name in enumerate(_BOX_FIELDS, start=1):
            grid.addWidget(QLabel(f"{name.capitalize()}:", self._box_group), row, 0)
            pixel_label = QLabel("", self._box_group)
            norm_label = QLabel("", self._box_group)
            grid.addWidget(pixel_label, row, 1)
            grid.addWidget(norm_label, row, 2)
            self._box_labels[name] = (pixel_label, norm_label)
        self._box_group.setVisible(False)
        layout.addWidget(self._box_group)

        self.export_view = QPlainTextEdit(self)
        self.export_view.setReadOnly(True)
        self.export_view.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self.export_view.setPlaceholderText("Draw a rectangle to export its coordinates.")
        layout.addWidget(self.export_view, 1)

        view_model.image.changed.connect(self._on_image_changed)
        view_model.hover.changed.connect(self._on_hover_changed)
        view_model.selection.changed.connect(self._on_selection_changed)
        view_model.export_text.changed.connect(self._on_export_changed)

    def box_values(self) -> dict[str, tuple[str, str]]:
        """Return the displayed ``(pixels, normalized)`` text per box field."""
        return {
            name: (pixel.text(), norm.text()) for name, (pixel, norm) in self._box_labels.items()
        }

    def is_box_visible(self) -> bool:
        return not self._box_group.isHidden()

    # ------------------------------------------------------------------
    # View model callbacks
    # ------------------------------------------------------------------
    def _on_image_changed(self, dimensions: ImageDimensions, _previous) -> None:
        if dimensions.is_valid():
            self.dimensions_label.setText(f"{dimensions.width} × {dimensions.height}")
        else:
            self.dimensions_label.setText("—")

    def _on_hover_changed(self, reading: HoverReading | None, _previous) -> None:
        pixel_text, normalized_text = self._view_model.formatter.display_hover(reading)
        self.hover_pixel_label.setText(pixel_text)
        self.hover_normalized_label.setText(normalized_text)

    def _on_selection_changed(self, box: SelectionBox | None, _previous) -> None:
        if box is None:
            self._box_group.setVisible(False)
            return
        rows = self._view_model.formatter.display_box(box)
        for name, (pixels, normalized) in rows.items():
            pixel_label, norm_label = self._box_labels[name]
            pixel_label.setText(str(pixels))
            norm_label.setText(f"({normalized})")
        self._box_group.setVisible(True)

    def _on_export_changed(self, text: str, _previous) -> None:
        self.export_view.setPlainText(text)


__all__ = ["CoordinatePanel"]
