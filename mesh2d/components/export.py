import logging
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


class FlatBuffers(NamedTuple):
    '''
    Export tuple handed to mesh writers.

    positions: float32 array of shape (n, 3), z is always 0.
    indices:   flat int32 array, three entries per triangle in triangle order.
    '''
    positions: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.size // 3)

    def triples(self) -> list[tuple[int, int, int]]:
        return [tuple(int(v) for v in t) for t in self.indices.reshape(-1, 3)]


def write_obj(path, buffers: FlatBuffers):
    with open(path, 'w') as f:
        f.write('# mesh2d export\n')
        for x, y, z in buffers.positions:
            f.write(f'v {float(x)!r} {float(y)!r} {float(z)!r}\n')
        # OBJ faces are 1-based
        for i, j, k in buffers.triples():
            f.write(f'f {i + 1} {j + 1} {k + 1}\n')

    logger.info("wrote %d vertices, %d triangles to %s",
                buffers.vertex_count, buffers.triangle_count, path)


def read_obj(path) -> FlatBuffers:
    verts = []
    faces = []
    with open(path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            parts = line.split()
            if parts[0] == 'v':
                if len(parts) < 3:
                    raise ValueError(f"vertex needs at least 2 coordinates: {line!r}")
                if len(parts) >= 4:
                    x, y, z = float(parts[1]), float(parts[2]), float(parts[3])
                else:
                    x, y = float(parts[1]), float(parts[2])
                    z = 0.0
                verts.append([x, y, z])
            elif parts[0] == 'f':
                if len(parts) < 4:
                    raise ValueError(f"face with fewer than 3 vertices: {line!r}")
                # polygons are split into a fan around their first vertex
                idx = [int(t.split('/')[0]) - 1 for t in parts[1:]]
                for b, c in zip(idx[1:-1], idx[2:]):
                    faces.extend((idx[0], b, c))

    positions = np.array(verts, dtype=np.float32).reshape(-1, 3)
    indices = np.array(faces, dtype=np.int32)
    logger.info("read %d vertices, %d triangles from %s", len(verts), len(faces) // 3, path)
    return FlatBuffers(positions, indices)
