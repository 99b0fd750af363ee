import math

from PySide6 import QtCore, QtGui, QtWidgets

from ..utility import themed_gray


class GridBackground(QtWidgets.QGraphicsItem):

    def __init__(self, line_spacing: float):
        super().__init__()
        self.line_spacing = line_spacing
        self.setZValue(-1)

    def boundingRect(self):
        return QtCore.QRectF(-1e6, -1e6, 2e6, 2e6)

    def paint(self, p, opt, w):
        view = self.scene().views()[0] if self.scene().views() else None
        if not view: return
        rect = view.mapToScene(view.viewport().rect()).boundingRect()

        p.fillRect(rect, themed_gray(240))

        step = self.line_spacing
        if step <= 0 or rect.width() / step > 500:
            return # zoomed too far out for a readable grid

        axis_pen = QtGui.QPen(themed_gray(120), 2)
        axis_pen.setCosmetic(True)
        line_pen = QtGui.QPen(themed_gray(200))
        line_pen.setCosmetic(True)

        x = math.floor(rect.left() / step) * step
        while x <= rect.right():
            p.setPen(axis_pen if x == 0 else line_pen)
            p.drawLine(QtCore.QLineF(x, rect.top(), x, rect.bottom()))
            x += step
        y = math.floor(rect.top() / step) * step
        while y <= rect.bottom():
            p.setPen(axis_pen if y == 0 else line_pen)
            p.drawLine(QtCore.QLineF(rect.left(), y, rect.right(), y))
            y += step
