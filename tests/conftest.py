import os

# widget tests must not need a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6 import QtCore, QtWidgets

from mesh2d import IncrementalBuilder, MeshGraph


@pytest.fixture()
def graph() -> MeshGraph:
    return MeshGraph()


@pytest.fixture()
def builder() -> IncrementalBuilder:
    b = IncrementalBuilder()
    b.start()
    return b


@pytest.fixture()
def triangle_builder(builder) -> IncrementalBuilder:
    for x, y in [(0, 0), (1, 0), (0, 1)]:
        builder.place_or_grab(QtCore.QPointF(x, y))
    return builder


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app
