from PySide6 import QtCore, QtGui


def is_dark_mode() -> bool:
    hints = QtGui.QGuiApplication.styleHints()
    return hints.colorScheme() == QtCore.Qt.ColorScheme.Dark


def themed(color: QtGui.QColor, alpha: int | None = None) -> QtGui.QColor:
    '''
    Return color as-is in light mode, inverted in dark mode.
    '''
    out = QtGui.QColor(color)
    if is_dark_mode():
        out = QtGui.QColor(255 - color.red(), 255 - color.green(), 255 - color.blue())
    out.setAlpha(color.alpha() if alpha is None else alpha)
    return out


def themed_gray(value: int, alpha: int = 255) -> QtGui.QColor:
    return themed(QtGui.QColor(value, value, value), alpha)
