"""Letterboxed image surface that forwards pointer input to the ROI view model."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import (
    QColor,
    QImage,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPen,
    QPixmap,
    QResizeEvent,
)
from PySide6.QtWidgets import QSizePolicy, QWidget

from ....config import OVERLAY_COLOR, OVERLAY_FILL_ALPHA
from ....utils.image_loader import dimensions_of
from ...viewmodels.roi_viewmodel import RoiViewModel


class ImageCanvas(QWidget):
    """Paint the image contain-fit and draw the selection overlay on top.

    The widget's own rect is the container geometry; every resize is reported to
    the view model so the display metrics stay in step with the layout.
    """

    _BACKGROUND = QColor("#1e1e1e")
    _MESSAGE_COLOR = QColor("#f48771")

    def __init__(self, view_model: RoiViewModel, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("imageCanvas")
        self.setMouseTracking(True)
        self.setMinimumSize(200, 150)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self._view_model = view_model
        self._pixmap: QPixmap | None = None
        self._message: str | None = None
        self._overlay_color = QColor(OVERLAY_COLOR)

        view_model.selection.changed.connect(self._on_view_state_changed)
        view_model.selection_mode.changed.connect(self._on_mode_changed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_image(self, image: QImage) -> None:
        """Display *image* and hand its natural size to the view model."""
        self._message = None
        self._pixmap = QPixmap.fromImage(image)
        self._view_model.load_image_dimensions(dimensions_of(image))
        self._view_model.resize(self.width(), self.height())
        self.update()

    def show_error(self, message: str) -> None:
        """Replace the image with an error message."""
        self._pixmap = None
        self._message = message
        self._view_model.unload()
        self.update()

    def has_image(self) -> bool:
        return self._pixmap is not None

    def error_message(self) -> str | None:
        return self._message

    def set_overlay_color(self, color: str) -> None:
        candidate = QColor(color)
        if candidate.isValid():
            self._overlay_color = candidate
            self.update()

    def overlay_rect(self) -> QRectF | None:
        """Return the selection overlay in widget coordinates."""
        corners = self._view_model.selection_overlay()
        if corners is None:
            return None
        top_left, bottom_right = corners
        return QRectF(
            top_left.x,
            top_left.y,
            bottom_right.x - top_left.x,
            bottom_right.y - top_left.y,
        )

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        size = event.size()
        self._view_model.resize(size.width(), size.height())

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        if self._view_model.pointer_pressed(pos.x(), pos.y()):
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        pos = event.position()
        self._view_model.pointer_moved(pos.x(), pos.y())
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        if event.button() == Qt.MouseButton.LeftButton:
            self._view_model.pointer_released()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:  # noqa: N802 - Qt override
        self._view_model.pointer_left()
        super().leaveEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802 - Qt override
        del event  # unused
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self._BACKGROUND)
            if self._message is not None:
                painter.setPen(self._MESSAGE_COLOR)
                painter.drawText(
                    self.rect(),
                    int(Qt.AlignmentFlag.AlignCenter) | int(Qt.TextFlag.TextWordWrap),
                    self._message,
                )
                return
            if self._pixmap is None:
                return

            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            metrics = self._view_model.controller.metrics
            target = QRectF(
                metrics.offset_x,
                metrics.offset_y,
                metrics.rendered_width,
                metrics.rendered_height,
            )
            painter.drawPixmap(target, self._pixmap, QRectF(self._pixmap.rect()))

            overlay = self.overlay_rect()
            if overlay is None:
                return
            pen = QPen(self._overlay_color)
            pen.setWidthF(2.0)
            pen.setCosmetic(True)
            fill = QColor(self._overlay_color)
            fill.setAlpha(OVERLAY_FILL_ALPHA)
            painter.setPen(pen)
            painter.setBrush(fill)
            painter.drawRect(overlay)
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # View model callbacks
    # ------------------------------------------------------------------
    def _on_view_state_changed(self, *_args) -> None:
        self.update()

    def _on_mode_changed(self, enabled: bool, _previous: bool) -> None:
        if enabled:
            self.setCursor(Qt.CursorShape.CrossCursor)
        else:
            self.unsetCursor()
        self.update()


__all__ = ["ImageCanvas"]
