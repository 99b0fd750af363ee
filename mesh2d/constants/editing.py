# All distances are in world units.

PICK_RADIUS = 0.3          # grab an existing vertex instead of placing a new one
VERTEX_DISC_RADIUS = 0.1

PIXELS_PER_UNIT = 80.0
GRID_SPACING = 1.0
WORLD_EXTENT = 50.0        # scene rect is [-extent, extent] on both axes

MIN_EXPORT_VERTICES = 3
MIN_EXPORT_TRIANGLES = 1
