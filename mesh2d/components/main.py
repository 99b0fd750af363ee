import logging

from PySide6 import QtCore, QtWidgets

from ..constants import GRID_SPACING, WORLD_EXTENT
from ..errors import MeshError, IllegalStateError
from .builder import BuilderState, IncrementalBuilder
from .editor_view import EditorView
from .export import read_obj, write_obj
from .grid_background import GridBackground
from .mesh_overlay import MeshOverlay

logger = logging.getLogger(__name__)

GUIDELINES = (
    "Guidelines:\n"
    "- Click the left mouse button to place a vertex (vertices connect automatically)\n"
    "- Hold the left mouse button on a vertex to drag it around\n"
    "- Press backspace to remove the last placed vertex"
)
OVERLAP_WARNING = "For optimal use, do not place vertices inside already existing triangles"


class Main(QtWidgets.QWidget):

    def __init__(self, builder: IncrementalBuilder | None = None):
        super().__init__()
        self.setWindowTitle("2D Mesh Editor")

        self.builder = builder if builder is not None else IncrementalBuilder()

        # Scene & view
        self.scene = QtWidgets.QGraphicsScene()
        self.scene.addItem(GridBackground(GRID_SPACING))

        self.overlay = MeshOverlay(self.builder)
        self.scene.addItem(self.overlay)

        self.editor = EditorView(self.scene)
        self.editor.setSceneRect(-WORLD_EXTENT, -WORLD_EXTENT, 2 * WORLD_EXTENT, 2 * WORLD_EXTENT)

        self.editor.scenePressed.connect(self._on_scene_pressed)
        self.editor.sceneDragged.connect(self._on_scene_dragged)
        self.editor.sceneReleased.connect(self._on_scene_released)
        self.editor.sceneMouseMoved.connect(self.overlay.setMouse)
        self.editor.deletePressed.connect(self._on_delete_pressed)

        guidelines = QtWidgets.QLabel(GUIDELINES)
        guidelines.setWordWrap(True)

        self.hint_label = QtWidgets.QLabel("Click in the view to add vertices")
        self.warning_label = QtWidgets.QLabel(OVERLAP_WARNING)
        self.warning_label.setWordWrap(True)
        self.warning_label.setStyleSheet("color: #B07000;")

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(guidelines)
        layout.addWidget(self._make_buttons())
        layout.addWidget(self.hint_label)
        layout.addWidget(self.warning_label)
        layout.addWidget(self.editor)

        self.builder.stateChanged.connect(self._apply_state)
        self._apply_state(self.builder.state)

    def _make_buttons(self):
        bar = QtWidgets.QWidget()
        row = QtWidgets.QHBoxLayout(bar)
        row.setContentsMargins(0, 0, 0, 0)

        self.start_button = QtWidgets.QPushButton("Start Creating Mesh")
        self.finish_button = QtWidgets.QPushButton("Finish Creating Mesh")
        self.clear_button = QtWidgets.QPushButton("Clear Mesh")
        self.edit_button = QtWidgets.QPushButton("Edit")
        self.save_button = QtWidgets.QPushButton("Save Mesh")

        self.start_button.clicked.connect(self.builder.start)
        self.finish_button.clicked.connect(self.builder.finish)
        self.clear_button.clicked.connect(self.builder.clear)
        self.edit_button.clicked.connect(self.builder.reopen)
        self.save_button.clicked.connect(self.save_mesh)

        for b in (self.start_button, self.finish_button, self.clear_button,
                  self.edit_button, self.save_button):
            row.addWidget(b)
        return bar

    def _apply_state(self, state: BuilderState):
        building = state is BuilderState.BUILDING
        finished = state is BuilderState.FINISHED

        self.start_button.setEnabled(state is BuilderState.IDLE)
        self.finish_button.setEnabled(building)
        self.clear_button.setEnabled(building)
        self.edit_button.setEnabled(finished)
        self.save_button.setEnabled(finished)

        self.hint_label.setVisible(building)
        self.warning_label.setVisible(building)
        self.editor.setCursor(QtCore.Qt.CrossCursor if building else QtCore.Qt.ArrowCursor)

    # ---- input ----
    def _on_scene_pressed(self, scene_pt: QtCore.QPointF):
        if self.builder.state is BuilderState.BUILDING:
            self.builder.place_or_grab(scene_pt)

    def _on_scene_dragged(self, scene_pt: QtCore.QPointF):
        if self.builder.dragging:
            self.builder.drag_to(scene_pt)

    def _on_scene_released(self, scene_pt: QtCore.QPointF):
        if self.builder.state is BuilderState.BUILDING:
            self.builder.release_drag()

    def _on_delete_pressed(self):
        try:
            self.builder.delete_last()
        except IllegalStateError as e:
            logger.warning("delete ignored: %s", e)

    # ---- files ----
    def save_mesh(self):
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Save Mesh", "NewMesh.obj", "Wavefront OBJ (*.obj);;All Files (*)")
        if not path:
            logger.warning("save cancelled")
            return
        self.save_to(path)

    def save_to(self, path) -> bool:
        try:
            self.builder.export(lambda buffers: write_obj(path, buffers))
        except (MeshError, OSError) as e:
            logger.warning("save to %s failed: %s", path, e)
            QtWidgets.QMessageBox.warning(self, "Save Error", f"Failed to save mesh:\n{e}")
            return False
        return True

    def open_file(self, path):
        buffers = read_obj(path)
        self.builder.load(buffers)

    def closeEvent(self, e):
        self.builder.reset()
        super().closeEvent(e)
