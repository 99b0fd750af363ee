# Mesh core and the Qt components built around it

from .export import FlatBuffers, write_obj, read_obj
from .graph import MeshGraph
from .builder import BuilderState, IncrementalBuilder
from .grid_background import GridBackground
from .editor_view import EditorView
from .mesh_overlay import MeshOverlay
from .main import Main
