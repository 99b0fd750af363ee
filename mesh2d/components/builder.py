import enum
import logging

from PySide6 import QtCore

from ..constants import PICK_RADIUS
from ..errors import IllegalStateError
from .export import FlatBuffers
from .graph import MeshGraph

logger = logging.getLogger(__name__)


class BuilderState(enum.Enum):
    IDLE = 'idle'
    BUILDING = 'building'
    FINISHED = 'finished'


class IncrementalBuilder(QtCore.QObject):
    '''
    Builds a MeshGraph one vertex at a time.

    Placing a vertex connects it to its two nearest neighbours, clicking close
    to an existing vertex grabs it for dragging instead, and delete_last undoes
    the most recent vertex with every triangle built on it.

    Idle -> Building -> Finished, with dragging only possible while Building.
    Calling an operation from a state that forbids it raises IllegalStateError
    and leaves the graph untouched.
    '''
    stateChanged = QtCore.Signal(object)

    def __init__(self, graph: MeshGraph | None = None, pick_radius: float = PICK_RADIUS):
        super().__init__()
        self.graph = graph if graph is not None else MeshGraph()
        self.pick_radius = pick_radius
        self._state = BuilderState.IDLE
        self._dragged_index: int | None = None

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def dragging(self) -> bool:
        return self._dragged_index is not None

    @property
    def dragged_index(self) -> int | None:
        return self._dragged_index

    # ---- session lifecycle ----
    def start(self):
        self._require(BuilderState.IDLE, BuilderState.FINISHED, op='start')
        self.graph.clear()
        self._set_state(BuilderState.BUILDING)

    def finish(self):
        self._require(BuilderState.BUILDING, op='finish')
        self._dragged_index = None
        self._set_state(BuilderState.FINISHED)

    def reopen(self):
        self._require(BuilderState.FINISHED, op='reopen')
        self._set_state(BuilderState.BUILDING)

    def clear(self):
        '''Empty the graph and keep editing.'''
        self._dragged_index = None
        self.graph.clear()
        self._set_state(BuilderState.BUILDING)

    def reset(self):
        '''Empty the graph and end the session.'''
        self._dragged_index = None
        self.graph.clear()
        self._set_state(BuilderState.IDLE)

    # ---- input ----
    def place_or_grab(self, position) -> int:
        '''
        Grab the vertex under position, or place a new one there.

        Returns the grabbed or newly placed vertex index.
        '''
        self._require(BuilderState.BUILDING, op='place_or_grab')

        grabbed = self.graph.find_nearest_vertex(position, self.pick_radius)
        if grabbed is not None:
            self._dragged_index = grabbed
            logger.debug("grabbed vertex %d", grabbed)
            return grabbed

        new = self.graph.add_vertex(position)
        if self.graph.vertex_count >= 3:
            self._connect(new)
        return new

    def drag_to(self, position):
        self._require(BuilderState.BUILDING, op='drag_to')
        if self._dragged_index is None:
            raise IllegalStateError("drag_to called without a grabbed vertex")
        self.graph.move_vertex(self._dragged_index, position)

    def release_drag(self):
        # releasing twice is fine, every pointer-up ends up here
        self._require(BuilderState.BUILDING, op='release_drag')
        self._dragged_index = None

    def delete_last(self) -> int:
        self._require(BuilderState.BUILDING, op='delete_last')
        if self.graph.vertex_count < 1:
            raise IllegalStateError("delete_last called on an empty mesh")

        last = self.graph.vertex_count - 1
        removed = self.graph.remove_vertex_and_dependents(last)
        if self._dragged_index == last:
            self._dragged_index = None
        logger.debug("removed vertex %d and %d triangle(s)", last, len(removed))
        return last

    # ---- export / import ----
    def export(self, writer=None) -> FlatBuffers:
        '''
        Hand the finished mesh to writer and end the session.

        Nothing is cleared if building the buffers or the writer fails.
        '''
        self._require(BuilderState.FINISHED, op='export')
        buffers = self.graph.to_flat_buffers()
        if writer is not None:
            writer(buffers)
        logger.info("exported %d vertices, %d triangles",
                    buffers.vertex_count, buffers.triangle_count)
        self.reset()
        return buffers

    def load(self, buffers: FlatBuffers):
        self._dragged_index = None
        self.graph.load_flat_buffers(buffers)
        self._set_state(BuilderState.FINISHED)

    # ---- overlay helpers ----
    def preview_targets(self, position) -> list[int]:
        '''Vertices the cursor preview lines run to.'''
        n = self.graph.vertex_count
        if n == 0:
            return []
        if n == 1:
            return [0]
        return list(self.graph.find_two_nearest_vertices(position))

    # ---- internals ----
    def _connect(self, new: int):
        g = self.graph
        p, q = g.find_two_nearest_vertices(g.vertex(new), exclude=new)

        if not g.vertices_of_same_triangle(p, q):
            bridge = g.share_vertex(g.triangles_touching(p), g.triangles_touching(q))
            if bridge is not None:
                g.add_triangle(p, bridge, new)
                g.add_triangle(q, bridge, new)
                logger.debug("bridged vertex %d over %d: (%d, %d, %d), (%d, %d, %d)",
                             new, bridge, p, bridge, new, q, bridge, new)
                return

        g.add_triangle(p, q, new)
        logger.debug("triangle (%d, %d, %d)", p, q, new)

    def _require(self, *allowed: BuilderState, op: str):
        if self._state not in allowed:
            raise IllegalStateError(f"{op} not allowed while {self._state.value}")

    def _set_state(self, state: BuilderState):
        if state is self._state:
            return
        logger.debug("state %s -> %s", self._state.value, state.value)
        self._state = state
        self.stateChanged.emit(state)
