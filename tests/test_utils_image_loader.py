from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtGui", reason="Qt GUI module not available", exc_type=ImportError)

from PIL import Image
from PySide6.QtGui import QImage

from roiPicker.core.display_metrics import ImageDimensions
from roiPicker.errors import ImageLoadError, UnsupportedImageError
from roiPicker.utils import image_loader


@pytest.fixture
def png_path(tmp_path: Path) -> Path:
    path = tmp_path / "sample.png"
    Image.new("RGB", (64, 48), color="red").save(path)
    return path


def test_is_supported_image_is_case_insensitive():
    assert image_loader.is_supported_image(Path("photo.JPG"))
    assert image_loader.is_supported_image(Path("photo.jpeg"))
    assert image_loader.is_supported_image(Path("scan.png"))
    assert not image_loader.is_supported_image(Path("movie.mov"))
    assert not image_loader.is_supported_image(Path("README"))


def test_load_qimage_reads_natural_size(png_path):
    image = image_loader.load_qimage(png_path)

    assert not image.isNull()
    assert image_loader.dimensions_of(image) == ImageDimensions(64, 48)


def test_load_qimage_rejects_unsupported_suffix(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")

    with pytest.raises(UnsupportedImageError):
        image_loader.load_qimage(path)


def test_load_qimage_missing_file(tmp_path):
    with pytest.raises(ImageLoadError, match="not found"):
        image_loader.load_qimage(tmp_path / "missing.png")


def test_load_qimage_falls_back_to_pillow(png_path, monkeypatch):
    class NullReader:
        def __init__(self, _filename):
            pass

        def setAutoTransform(self, _enabled):  # noqa: N802 - Qt API
            pass

        def read(self):
            return QImage()

        def errorString(self):  # noqa: N802 - Qt API
            return "no plugin"

    monkeypatch.setattr(image_loader, "QImageReader", NullReader)

    image = image_loader.load_qimage(png_path)

    assert (image.width(), image.height()) == (64, 48)


def test_load_qimage_corrupt_file(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"not really a jpeg")

    with pytest.raises(ImageLoadError):
        image_loader.load_qimage(path)
