"""Default configuration values for roiPicker."""

from __future__ import annotations

from typing import Final

# Formats offered by the open dialog and accepted by the CLI.  Decoding itself is
# delegated to Qt (with a Pillow fallback), which supports many more formats.
SUPPORTED_IMAGE_SUFFIXES: Final[tuple[str, ...]] = (".jpg", ".jpeg", ".png")
IMAGE_FILE_FILTER: Final[str] = "Images (*.jpg *.jpeg *.png)"

# ---------------------------------------------------------------------------
# Export and readout formatting
# ---------------------------------------------------------------------------

# Normalised values shown on screen are rounded; exported values never are.
DISPLAY_PRECISION: Final[int] = 3
EXPORT_JSON_INDENT: Final[int] = 4
EXPORT_FIELDS: Final[tuple[str, ...]] = ("top", "left", "right", "bottom")
OUTSIDE_LABEL: Final[str] = "(outside)"

# ---------------------------------------------------------------------------
# UI interaction constants
# ---------------------------------------------------------------------------

WINDOW_TITLE_PREFIX: Final[str] = "Image Coordinates"
WINDOW_DEFAULT_SIZE: Final[tuple[int, int]] = (1100, 720)
COPY_FEEDBACK_MS: Final[int] = 2000
OVERLAY_COLOR: Final[str] = "#ff6b6b"
OVERLAY_FILL_ALPHA: Final[int] = 48
SELECTION_MODE_LABEL: Final[str] = "Drawing Mode"
HOVER_MODE_LABEL: Final[str] = "Hover Mode"
COPY_LABEL: Final[str] = "Copy Coordinates"
COPIED_LABEL: Final[str] = "Copied!"
