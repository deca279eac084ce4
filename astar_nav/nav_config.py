# nav_config.py

# =========================
# World defaults
# =========================
MAP_SIZE        = 10          # grid side length in cells
OBSTACLE_RATIO  = 0.2         # fraction of cells turned into obstacles
START_CELL      = (0, 0)      # (row, col), never an obstacle

# =========================
# Text rendering
# =========================
FREE_GLYPH      = "□"         # traversable
OBSTACLE_GLYPH  = "■"         # obstacle
PATH_GLYPH      = "*"         # path step
