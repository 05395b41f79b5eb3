"""Shared fixtures for appdrawer tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PIL import Image
from PySide6.QtGui import QGuiApplication

SQUARE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="16" height="16" viewBox="0 0 16 16">'
    '<rect x="0" y="0" width="16" height="16" fill="#0000ff" fill-opacity="0.5"/>'
    "</svg>"
)


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QGuiApplication.instance() or QGuiApplication([])
    yield app


@pytest.fixture
def make_png():
    """Write a solid-colour RGBA PNG; ``size`` is an int or (width, height)."""

    def _make(path, size, color=(255, 0, 0, 255)):
        if isinstance(size, int):
            size = (size, size)
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGBA", size, color).save(path, format="PNG")
        return path

    return _make


@pytest.fixture
def make_svg():
    def _make(path, source=SQUARE_SVG):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _make
