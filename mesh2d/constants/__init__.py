from .editing import (
    PICK_RADIUS, VERTEX_DISC_RADIUS, PIXELS_PER_UNIT, GRID_SPACING, WORLD_EXTENT,
    MIN_EXPORT_VERTICES, MIN_EXPORT_TRIANGLES,
)
from .colors import VERTEX_COLOR, GRABBED_VERTEX_COLOR, EDGE_COLOR, PREVIEW_COLOR
