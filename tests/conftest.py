import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6 import QtGui


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QtGui.QGuiApplication.instance() or QtGui.QGuiApplication([])
    yield app


def make_image(width=4, height=3, color=QtGui.QColor(255, 0, 0),
               fmt=QtGui.QImage.Format.Format_ARGB32) -> QtGui.QImage:
    img = QtGui.QImage(width, height, fmt)
    img.fill(color)
    return img


@pytest.fixture
def image_factory():
    return make_image
