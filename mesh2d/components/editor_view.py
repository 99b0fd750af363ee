from PySide6 import QtCore, QtGui, QtWidgets

from ..constants import PIXELS_PER_UNIT


class EditorView(QtWidgets.QGraphicsView):
    '''Forwards pointer and key input, in scene coordinates, as signals.'''
    deletePressed = QtCore.Signal()
    scenePressed = QtCore.Signal(QtCore.QPointF)
    sceneDragged = QtCore.Signal(QtCore.QPointF)
    sceneReleased = QtCore.Signal(QtCore.QPointF)
    sceneMouseMoved = QtCore.Signal(QtCore.QPointF)

    def __init__(self, scene):
        super().__init__(scene)
        self.setRenderHints(QtGui.QPainter.Antialiasing)
        self.setDragMode(QtWidgets.QGraphicsView.NoDrag)
        self.setViewportUpdateMode(QtWidgets.QGraphicsView.FullViewportUpdate)
        self.setTransformationAnchor(QtWidgets.QGraphicsView.AnchorUnderMouse)
        self.setMouseTracking(True)
        self.reset_view()

    def reset_view(self):
        # y axis points up in world space
        self.resetTransform()
        self.scale(PIXELS_PER_UNIT, -PIXELS_PER_UNIT)
        self.centerOn(0, 0)

    def wheelEvent(self, e):
        factor = 1.15 if e.angleDelta().y() > 0 else 1/1.15
        self.scale(factor, factor)

    def keyPressEvent(self, e):
        if e.key() in (QtCore.Qt.Key_Delete, QtCore.Qt.Key_Backspace):
            self.deletePressed.emit()
        else:
            super().keyPressEvent(e)

    def mousePressEvent(self, e):
        if e.button() == QtCore.Qt.LeftButton:
            self.scenePressed.emit(self._scene_pos(e))
        super().mousePressEvent(e)

    def mouseMoveEvent(self, e):
        super().mouseMoveEvent(e)
        pt = self._scene_pos(e)
        if e.buttons() & QtCore.Qt.LeftButton:
            self.sceneDragged.emit(pt)
        self.sceneMouseMoved.emit(pt)

    def mouseReleaseEvent(self, e):
        if e.button() == QtCore.Qt.LeftButton:
            self.sceneReleased.emit(self._scene_pos(e))
        super().mouseReleaseEvent(e)

    def _scene_pos(self, e) -> QtCore.QPointF:
        return self.mapToScene(e.position().toPoint())
