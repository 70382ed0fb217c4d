"""Main window hosting the image canvas, toolbar buttons and coordinate panel."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from ...config import (
    COPIED_LABEL,
    COPY_LABEL,
    HOVER_MODE_LABEL,
    IMAGE_FILE_FILTER,
    SELECTION_MODE_LABEL,
    WINDOW_DEFAULT_SIZE,
    WINDOW_TITLE_PREFIX,
)
from ...core.export import ExportFormatter
from ...errors import ClipboardUnavailableError, ImageLoadError, SettingsError
from ...errors.handler import ErrorHandler, ErrorSeverity
from ...settings.manager import SettingsManager
from ...utils.image_loader import load_qimage
from ..viewmodels.roi_viewmodel import RoiViewModel
from .widgets.coordinate_panel import CoordinatePanel
from .widgets.image_canvas import ImageCanvas

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-image viewer for reading coordinates and exporting an ROI."""

    def __init__(
        self,
        settings: SettingsManager,
        *,
        error_handler: ErrorHandler | None = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE_PREFIX)
        self.resize(*WINDOW_DEFAULT_SIZE)

        self._settings = settings
        self._errors = error_handler or ErrorHandler(_LOGGER)
        self._errors.register_ui_callback(self._show_error)
        self._image_path: Path | None = None

        self.view_model = RoiViewModel(self._formatter_from_settings())

        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        toolbar = QHBoxLayout()
        self.open_button = QPushButton("Open Image…", central)
        self.mode_button = QPushButton(SELECTION_MODE_LABEL, central)
        self.clear_button = QPushButton("Clear Rectangle", central)
        self.copy_button = QPushButton(COPY_LABEL, central)
        self.copy_button.setEnabled(False)
        for button in (self.open_button, self.mode_button, self.clear_button, self.copy_button):
            toolbar.addWidget(button)
        toolbar.addStretch(1)
        root.addLayout(toolbar)

        splitter = QSplitter(Qt.Orientation.Horizontal, central)
        self.canvas = ImageCanvas(self.view_model, splitter)
        self.panel = CoordinatePanel(self.view_model, splitter)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 0)
        root.addWidget(splitter, 1)
        self.setCentralWidget(central)

        self._copy_reset_timer = QTimer(self)
        self._copy_reset_timer.setSingleShot(True)
        self._copy_reset_timer.timeout.connect(self._reset_copy_label)

        self.open_button.clicked.connect(self.prompt_open_image)
        self.mode_button.clicked.connect(self.toggle_selection_mode)
        self.clear_button.clicked.connect(self.view_model.clear)
        self.copy_button.clicked.connect(self.copy_coordinates)
        self.view_model.export_text.changed.connect(self._on_export_changed)
        self.view_model.selection_mode.changed.connect(self._on_mode_changed)
        self._settings.settingsChanged.connect(self._on_setting_changed)

        self.canvas.set_overlay_color(str(self._settings.get("ui.overlay_color")))
        if self._settings.get("ui.start_in_selection_mode", False):
            self.view_model.set_selection_mode(True)

    # ------------------------------------------------------------------
    # Image loading
    # ------------------------------------------------------------------
    def prompt_open_image(self) -> None:
        start_dir = self._settings.get("last_open_dir") or str(Path.home())
        filename, _ = QFileDialog.getOpenFileName(self, "Open Image", start_dir, IMAGE_FILE_FILTER)
        if filename:
            self.open_image(Path(filename))

    def open_image(self, path: Path) -> bool:
        """Load *path* into the canvas; failures are reported, not raised."""
        try:
            image = load_qimage(path)
        except ImageLoadError as exc:
            self._image_path = None
            self.setWindowTitle(WINDOW_TITLE_PREFIX)
            self.canvas.show_error(f"Error loading image:\n{exc}")
            self._errors.handle(exc, ErrorSeverity.ERROR, {"path": str(path)})
            return False

        self._image_path = Path(path)
        self.canvas.set_image(image)
        self.setWindowTitle(f"{WINDOW_TITLE_PREFIX} - {self._image_path.name}")
        self.statusBar().showMessage(f"{image.width()} × {image.height()}")
        try:
            self._settings.set("last_open_dir", str(self._image_path.parent))
        except (SettingsError, OSError) as exc:
            self._errors.handle(exc, ErrorSeverity.WARNING)
        return True

    def current_image_path(self) -> Path | None:
        return self._image_path

    # ------------------------------------------------------------------
    # Toolbar actions
    # ------------------------------------------------------------------
    def toggle_selection_mode(self) -> None:
        self.view_model.toggle_selection_mode()

    def copy_coordinates(self) -> bool:
        """Copy the export text to the clipboard and flash a confirmation."""
        text = self.view_model.export_text.value
        if not text:
            return False
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            self._errors.handle(ClipboardUnavailableError("Clipboard is not available"))
            return False
        clipboard.setText(text)
        self.copy_button.setText(COPIED_LABEL)
        self._copy_reset_timer.start(int(self._settings.get("ui.copy_feedback_ms", 0)))
        return True

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def _formatter_from_settings(self) -> ExportFormatter:
        return ExportFormatter(**self._settings.export_options())

    def _show_error(self, message: str, severity: ErrorSeverity) -> None:
        del severity  # unused
        self.statusBar().showMessage(message)

    def _reset_copy_label(self) -> None:
        self.copy_button.setText(COPY_LABEL)

    def _on_export_changed(self, text: str, _previous: str) -> None:
        self.copy_button.setEnabled(bool(text))

    def _on_mode_changed(self, enabled: bool, _previous: bool) -> None:
        self.mode_button.setText(HOVER_MODE_LABEL if enabled else SELECTION_MODE_LABEL)
        self.mode_button.setStyleSheet(
            f"background-color: {self._settings.get('ui.overlay_color')};" if enabled else ""
        )

    def _on_setting_changed(self, key: str, value: Any) -> None:
        if key == "ui.overlay_color":
            self.canvas.set_overlay_color(str(value))
        elif key.startswith("export."):
            self.view_model.set_formatter(self._formatter_from_settings())


__all__ = ["MainWindow"]
