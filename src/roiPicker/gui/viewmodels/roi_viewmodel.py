"""RoiViewModel: pure Python, no Qt dependency.

Wraps :class:`~roiPicker.core.selection.SelectionController` and republishes its
state through observable properties so widgets only ever bind to values.
"""

from __future__ import annotations

import logging

from ...core.coordinate_mapper import DisplayPoint
from ...core.display_metrics import EMPTY_IMAGE, ContainerGeometry, ImageDimensions
from ...core.export import ExportFormatter
from ...core.selection import HoverReading, SelectionBox, SelectionController, SelectionState
from ...events.signal import ObservableProperty

_LOGGER = logging.getLogger(__name__)


class RoiViewModel:
    """Presentation state for a single image and its region of interest.

    Observable properties
    ---------------------
    image:
        :class:`ImageDimensions` of the loaded image.
    hover:
        Latest :class:`HoverReading`, ``None`` while the pointer is off the surface.
    selection:
        Live :class:`SelectionBox` (also while dragging), ``None`` when cleared.
    selection_mode:
        Whether pointer-down draws a rectangle.
    export_text:
        Export text of the committed selection, empty otherwise.
    """

    def __init__(self, formatter: ExportFormatter | None = None) -> None:
        self.formatter = formatter or ExportFormatter()
        self.image = ObservableProperty(EMPTY_IMAGE, name="image")
        self.hover = ObservableProperty(None, name="hover")
        self.selection = ObservableProperty(None, name="selection")
        self.selection_mode = ObservableProperty(False, name="selection_mode")
        self.export_text = ObservableProperty("", name="export_text")
        self._controller = SelectionController(
            on_selection_changed=self._on_selection_changed,
            on_hover_changed=self._on_hover_changed,
        )

    @property
    def controller(self) -> SelectionController:
        return self._controller

    def set_formatter(self, formatter: ExportFormatter) -> None:
        self.formatter = formatter
        self._refresh_export()

    # ------------------------------------------------------------------
    # Collaborator inputs
    # ------------------------------------------------------------------
    def load_image_dimensions(self, dimensions: ImageDimensions) -> None:
        self._controller.set_image(dimensions)
        self.image.value = dimensions
        self.hover.value = None

    def unload(self) -> None:
        """Forget the current image along with its selection and hover readout."""
        self.load_image_dimensions(EMPTY_IMAGE)

    def resize(self, width: float, height: float) -> None:
        self._controller.set_container(ContainerGeometry(float(width), float(height)))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_selection_mode(self, enabled: bool) -> None:
        self._controller.set_selection_mode(enabled)
        self.selection_mode.value = self._controller.is_selection_mode()

    def toggle_selection_mode(self) -> bool:
        """Flip between hover and drawing mode and return the new mode."""
        self.set_selection_mode(not self._controller.is_selection_mode())
        return self.selection_mode.value

    def clear(self) -> None:
        self._controller.clear()

    def can_copy(self) -> bool:
        return bool(self.export_text.value)

    # ------------------------------------------------------------------
    # Pointer events (container-local coordinates)
    # ------------------------------------------------------------------
    def pointer_pressed(self, x: float, y: float) -> bool:
        return self._controller.on_pointer_down(x, y)

    def pointer_moved(self, x: float, y: float) -> None:
        self._controller.on_pointer_move(x, y)

    def pointer_released(self) -> None:
        self._controller.on_pointer_up()

    def pointer_left(self) -> None:
        self._controller.on_pointer_leave()

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def is_dragging(self) -> bool:
        return self._controller.state is SelectionState.DRAGGING

    def selection_overlay(self) -> tuple[DisplayPoint, DisplayPoint] | None:
        """Return the container-local corners of the current selection.

        The overlay follows the dragged rectangle itself, so a drag to the
        image edge reaches the edge of the rendered image.
        """
        rect = self._controller.rectangle
        if rect is None:
            return None
        metrics = self._controller.metrics
        return (
            DisplayPoint(rect.left + metrics.offset_x, rect.top + metrics.offset_y),
            DisplayPoint(rect.right + metrics.offset_x, rect.bottom + metrics.offset_y),
        )

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------
    def _on_selection_changed(self, box: SelectionBox | None) -> None:
        self.selection.value = box
        self._refresh_export()

    def _on_hover_changed(self, reading: HoverReading | None) -> None:
        self.hover.value = reading

    def _refresh_export(self) -> None:
        text = self.formatter.format(self._controller.committed_selection())
        if self.export_text.set(text):
            _LOGGER.debug("Export text updated (%d chars)", len(text))


__all__ = ["RoiViewModel"]
