import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Widget tests run headless.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from roiPicker.core.display_metrics import ContainerGeometry, ImageDimensions  # noqa: E402
from roiPicker.core.selection import SelectionController  # noqa: E402


@pytest.fixture
def make_controller():
    """Return a factory building a controller with an image and container installed."""

    def _factory(image=(300, 300), container=(300, 300), *, selecting=True, **callbacks):
        controller = SelectionController(**callbacks)
        controller.set_image(ImageDimensions(*image))
        controller.set_container(ContainerGeometry(*container))
        if selecting:
            controller.enter_selection_mode()
        return controller

    return _factory
