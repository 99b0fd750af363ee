import logging
import math

import numpy as np
from PySide6 import QtCore

from ..constants import MIN_EXPORT_VERTICES, MIN_EXPORT_TRIANGLES
from ..errors import IndexOutOfRangeError, InvalidIndexError, InsufficientGeometryError
from .export import FlatBuffers

logger = logging.getLogger(__name__)


def as_point(p) -> QtCore.QPointF:
    '''
    Copy a QPointF, or build one from any (x, y, ...) sequence.
    '''
    if isinstance(p, QtCore.QPointF):
        return QtCore.QPointF(p)
    return QtCore.QPointF(float(p[0]), float(p[1]))


def distance(a: QtCore.QPointF, b: QtCore.QPointF) -> float:
    return math.hypot(a.x() - b.x(), a.y() - b.y())


class MeshGraph(QtCore.QObject):
    '''
    Vertex positions plus index-triple triangles.

    Vertices are the only place positions live; a triangle is three vertex
    indices, so moving a vertex moves every triangle that uses it. Vertices are
    identified by index, two vertices at the same coordinates are distinct.
    '''
    changed = QtCore.Signal()

    def __init__(self):
        super().__init__()
        self._pts: list[QtCore.QPointF] = []
        self._tris: list[tuple[int, int, int]] = []

    @classmethod
    def from_flat_buffers(cls, buffers: FlatBuffers) -> 'MeshGraph':
        graph = cls()
        graph.load_flat_buffers(buffers)
        return graph

    # vertices
    @property
    def vertex_count(self) -> int:
        return len(self._pts)

    def vertices(self) -> list[QtCore.QPointF]:
        return [QtCore.QPointF(p) for p in self._pts]

    def vertex(self, index: int) -> QtCore.QPointF:
        self._check_vertex(index)
        return QtCore.QPointF(self._pts[index])

    def add_vertex(self, position) -> int:
        self._pts.append(as_point(position))
        self.changed.emit()
        return len(self._pts) - 1

    def move_vertex(self, index: int, position):
        self._check_vertex(index)
        self._pts[index] = as_point(position)
        self.changed.emit()

    def remove_vertex_and_dependents(self, index: int) -> list[tuple[int, int, int]]:
        '''
        Remove a vertex together with every triangle that references it.

        Only the last vertex can be removed, so the indices stored in the
        remaining triangles never need shifting. Returns the removed triangles.
        '''
        self._check_vertex(index)
        if index != len(self._pts) - 1:
            raise InvalidIndexError(
                f"only the last vertex ({len(self._pts) - 1}) can be removed, got {index}")

        removed = [t for t in self._tris if index in t]
        self._tris = [t for t in self._tris if index not in t]
        self._pts.pop()
        self.changed.emit()
        return removed

    # triangles (indices into vertices)
    @property
    def triangle_count(self) -> int:
        return len(self._tris)

    def triangles(self) -> list[tuple[int, int, int]]:
        return list(self._tris)

    def triangle(self, index: int) -> tuple[int, int, int]:
        if not 0 <= index < len(self._tris):
            raise IndexOutOfRangeError(f"triangle index {index} out of range [0, {len(self._tris)})")
        return self._tris[index]

    def add_triangle(self, i: int, j: int, k: int) -> int:
        self._check_triangle(i, j, k, len(self._pts))
        self._tris.append((i, j, k))
        self.changed.emit()
        return len(self._tris) - 1

    def clear(self):
        self._pts.clear()
        self._tris.clear()
        self.changed.emit()

    # queries
    def find_nearest_vertex(self, position, max_distance: float) -> int | None:
        '''First vertex, in index order, closer than max_distance.'''
        p = as_point(position)
        for i, v in enumerate(self._pts):
            if distance(v, p) < max_distance:
                return i
        return None

    def find_two_nearest_vertices(self, position, exclude: int | None = None) -> tuple[int, int]:
        p = as_point(position)
        nearest = [-1, -1]
        nearest_dist = [math.inf, math.inf]

        for i, v in enumerate(self._pts):
            if i == exclude:
                continue
            d = distance(v, p)
            if d < nearest_dist[0]:
                nearest[1], nearest_dist[1] = nearest[0], nearest_dist[0]
                nearest[0], nearest_dist[0] = i, d
            elif d < nearest_dist[1]:
                nearest[1], nearest_dist[1] = i, d

        if nearest[1] == -1:
            raise InsufficientGeometryError("need at least two candidate vertices")
        return nearest[0], nearest[1]

    def triangles_touching(self, index: int) -> list[int]:
        self._check_vertex(index)
        return [ti for ti, t in enumerate(self._tris) if index in t]

    def share_vertex(self, tris_a, tris_b) -> int | None:
        '''
        A vertex used by some triangle of tris_a and some triangle of tris_b.

        Scans each triangle of tris_a against each triangle of tris_b and
        returns the first vertex of the tris_a triangle found in the other one.
        '''
        for ta in tris_a:
            first = self.triangle(ta)
            for tb in tris_b:
                second = self.triangle(tb)
                for v in first:
                    if v in second:
                        return v
        return None

    def vertices_of_same_triangle(self, a: int, b: int) -> bool:
        return any(a in t and b in t for t in self._tris)

    def is_valid(self) -> bool:
        n = len(self._pts)
        return all(len(set(t)) == 3 and all(0 <= v < n for v in t) for t in self._tris)

    # flat buffers
    def to_flat_buffers(self) -> FlatBuffers:
        if len(self._pts) < MIN_EXPORT_VERTICES or len(self._tris) < MIN_EXPORT_TRIANGLES:
            raise InsufficientGeometryError(
                f"need at least {MIN_EXPORT_VERTICES} vertices and {MIN_EXPORT_TRIANGLES} triangle, "
                f"have {len(self._pts)} vertices and {len(self._tris)} triangles")

        positions = np.zeros((len(self._pts), 3), dtype=np.float32)
        positions[:, 0] = [p.x() for p in self._pts]
        positions[:, 1] = [p.y() for p in self._pts]
        indices = np.array(self._tris, dtype=np.int32).reshape(-1)
        return FlatBuffers(positions, indices)

    def load_flat_buffers(self, buffers: FlatBuffers):
        '''Replace the whole graph with the contents of an export tuple.'''
        positions = np.asarray(buffers.positions)
        indices = np.asarray(buffers.indices).reshape(-1)
        if positions.ndim != 2 or positions.shape[1] not in (2, 3):
            raise ValueError(f"positions must have shape (n, 2) or (n, 3), got {positions.shape}")
        if indices.size % 3 != 0:
            raise ValueError(f"index count {indices.size} is not a multiple of 3")

        pts = [QtCore.QPointF(float(x), float(y)) for x, y in positions[:, :2]]
        tris = [tuple(int(v) for v in t) for t in indices.reshape(-1, 3)]
        for t in tris:
            self._check_triangle(*t, len(pts))

        self._pts = pts
        self._tris = tris
        self.changed.emit()

    # validation
    def _check_vertex(self, index: int):
        if not 0 <= index < len(self._pts):
            raise IndexOutOfRangeError(f"vertex index {index} out of range [0, {len(self._pts)})")

    @staticmethod
    def _check_triangle(i: int, j: int, k: int, n: int):
        if len({i, j, k}) != 3:
            raise InvalidIndexError(f"triangle indices must be distinct, got {(i, j, k)}")
        if any(idx < 0 or idx >= n for idx in (i, j, k)):
            raise InvalidIndexError(f"triangle {(i, j, k)} references a vertex outside [0, {n})")
