from PySide6 import QtGui

VERTEX_COLOR = QtGui.QColor('#2EC24A')
GRABBED_VERTEX_COLOR = QtGui.QColor('#F0A020')
EDGE_COLOR = QtGui.QColor('#D030D0')
PREVIEW_COLOR = QtGui.QColor('#3050E0')
