"""GUI entry point for the roiPicker desktop application."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from ..errors import SettingsError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..settings.manager import SettingsManager
from .ui.main_window import MainWindow
from .utils.console_logger import install_console_logging

_LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None, *, log_level: int = logging.INFO) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    install_console_logging(log_level)
    app = QApplication.instance() or QApplication(arguments)

    errors = ErrorHandler(_LOGGER)
    settings = SettingsManager()
    try:
        settings.load()
    except SettingsError as exc:
        # Keep running on the in-memory defaults.
        errors.handle(exc, ErrorSeverity.WARNING, {"path": str(settings.path)})

    window = MainWindow(settings, error_handler=errors)
    window.show()
    # Allow opening an image directly via argv[1].
    if len(arguments) > 1:
        window.open_image(Path(arguments[1]))
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
