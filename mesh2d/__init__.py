from .errors import (
    MeshError, IndexOutOfRangeError, InvalidIndexError, IllegalStateError, InsufficientGeometryError,
)
from .components import FlatBuffers, MeshGraph, BuilderState, IncrementalBuilder, write_obj, read_obj

__version__ = "0.1.0"
