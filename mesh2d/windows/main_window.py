import logging

from PySide6 import QtWidgets, QtGui, QtCore

from ..components import Main
from ..errors import MeshError

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self):
        super().__init__()

        self.setWindowTitle("2D Mesh Editor")

        self.main_widget = Main()
        self.setCentralWidget(self.main_widget)
        builder = self.main_widget.builder

        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        open_action = QtGui.QAction("Open...", self)
        save_action = QtGui.QAction("Save Mesh...", self)
        exit_action = QtGui.QAction("Exit", self)
        file_menu.addAction(open_action)
        file_menu.addAction(save_action)
        file_menu.addSeparator()
        file_menu.addAction(exit_action)

        open_action.setShortcut("Ctrl+O")
        save_action.setShortcut("Ctrl+S")
        exit_action.setShortcut("Ctrl+Q")

        mesh_menu = menubar.addMenu("Mesh")
        reset_view_action = QtGui.QAction("Reset View", self)
        mesh_menu.addAction(reset_view_action)

        open_action.triggered.connect(self._on_open_action)
        save_action.triggered.connect(self.main_widget.save_mesh)
        exit_action.triggered.connect(self.close)
        reset_view_action.triggered.connect(self.main_widget.editor.reset_view)

        # saving only makes sense for a finished mesh
        builder.stateChanged.connect(lambda _: save_action.setEnabled(self.main_widget.save_button.isEnabled()))
        save_action.setEnabled(self.main_widget.save_button.isEnabled())

        self._last_dir = ""

    def _on_open_action(self):
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self,
            "Open OBJ file",
            self._last_dir or "",
            "Wavefront OBJ (*.obj);;All Files (*)"
        )
        if not path:
            return
        self._last_dir = QtCore.QFileInfo(path).absolutePath()
        try:
            self.main_widget.open_file(path)
        except (MeshError, OSError, ValueError) as e:
            logger.warning("open %s failed: %s", path, e)
            QtWidgets.QMessageBox.critical(self, "Open Error", f"Failed to open file:\n{e}")

    def closeEvent(self, e):
        self.main_widget.close()
        super().closeEvent(e)
