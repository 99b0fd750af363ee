from PySide6 import QtCore, QtGui, QtWidgets

from ..constants import (
    VERTEX_DISC_RADIUS, VERTEX_COLOR, GRABBED_VERTEX_COLOR, EDGE_COLOR, PREVIEW_COLOR,
)
from .builder import BuilderState, IncrementalBuilder


class MeshOverlay(QtWidgets.QGraphicsItem):
    """Draws the mesh as points and lines, plus cursor preview lines while building."""
    def __init__(self, builder: IncrementalBuilder):
        super().__init__()
        self.setZValue(9999)  # above everything
        self.setAcceptedMouseButtons(QtCore.Qt.NoButton)
        self.builder = builder
        self._mouse: QtCore.QPointF | None = None

        self._edge_pen = self._pen(EDGE_COLOR, 2)
        self._preview_pen = self._pen(PREVIEW_COLOR, 1)
        self._vertex_pen = self._pen(QtGui.QColor(0, 0, 0), 1)

        builder.graph.changed.connect(self.update)
        builder.stateChanged.connect(lambda _: self.update())

    @staticmethod
    def _pen(color, width):
        pen = QtGui.QPen(color, width)
        pen.setCosmetic(True)
        return pen

    def setMouse(self, pt: QtCore.QPointF):
        if pt == self._mouse:
            return
        self._mouse = QtCore.QPointF(pt)
        self.update()

    # gigantic rect so we always get repaints when needed
    def boundingRect(self):
        return QtCore.QRectF(-1e9, -1e9, 2e9, 2e9)

    def paint(self, p, opt, w):
        graph = self.builder.graph
        pts = graph.vertices()

        if self.builder.state is BuilderState.BUILDING and self._mouse is not None:
            p.setPen(self._preview_pen)
            for i in self.builder.preview_targets(self._mouse):
                p.drawLine(QtCore.QLineF(self._mouse, pts[i]))

        p.setPen(self._edge_pen)
        p.setBrush(QtCore.Qt.NoBrush)
        if len(pts) == 2:
            p.drawLine(QtCore.QLineF(pts[0], pts[1]))
        for i, j, k in graph.triangles():
            p.drawPolygon(QtGui.QPolygonF([pts[i], pts[j], pts[k]]))

        p.setPen(self._vertex_pen)
        r = VERTEX_DISC_RADIUS
        for i, pt in enumerate(pts):
            color = GRABBED_VERTEX_COLOR if i == self.builder.dragged_index else VERTEX_COLOR
            p.setBrush(color)
            p.drawEllipse(pt, r, r)
