class MeshError(Exception):
    '''
    Base class for every recoverable error raised by the mesh core.
    '''


class IndexOutOfRangeError(MeshError, IndexError):
    pass


class InvalidIndexError(MeshError, ValueError):
    pass


class IllegalStateError(MeshError, RuntimeError):
    pass


class InsufficientGeometryError(MeshError, ValueError):
    pass
