"""Shared warning and complexity thresholds for the layout engine.

Offsets, sizes and spacings are fractions of a region or of the canvas;
radii and canvas sizes are in pixels.
"""

# Offsets beyond this fraction of the region push elements toward its edge.
LARGE_OFFSET = 0.8

# Relative sizes above this crowd neighbouring elements.
LARGE_RELATIVE_SIZE = 0.8

# Aspect-constrained sizes outside [MIN, MAX] are flagged as unusual.
MIN_ASPECT = 0.1
MAX_ASPECT = 10.0

# Grid repetition: per-axis count and the smallest comfortable spacing.
MAX_GRID_AXIS_COUNT = 20
MIN_GRID_SPACING = 0.05
DEFAULT_GRID_SPACING = 0.1

# Radial repetition: element count, default radius and the "may leave canvas" radius.
MAX_RADIAL_COUNT = 50
DEFAULT_RADIAL_RADIUS = 50.0
LARGE_RADIAL_RADIUS = 200.0

# Sized repetition above this many elements tends to overlap.
MAX_SIZED_REPEAT_ELEMENTS = 10

# Offsets combined with radial repetition beyond this fraction drift off-region.
RADIAL_OFFSET_LIMIT = 0.5

# Custom regions narrower or shorter than this are hard to target.
MIN_CUSTOM_REGION_SIZE = 0.05

# Region-name suggestions.
SUGGESTION_SIMILARITY = 0.5
MAX_SUGGESTIONS = 3

# Document performance limits.
MAX_PATH_COMMANDS = 1000
MAX_PATH_COORDINATES = 2000
MAX_DOCUMENT_PATHS = 100
MAX_DOCUMENT_COMMANDS = 1000
MAX_CANVAS_DIMENSION = 4096

# Validation report complexity, by total command count.
MEDIUM_COMPLEXITY_COMMANDS = 100
HIGH_COMPLEXITY_COMMANDS = 500
CONSOLIDATE_PATHS_ABOVE = 50
SIMPLIFY_COORDINATES_ABOVE = 1000

# Canvas width/height may differ from the nominal ratio by this much.
RATIO_TOLERANCE = 0.01

# Layer complexity buckets: (max paths, max commands).
LOW_LAYER_COMPLEXITY = (5, 20)
MEDIUM_LAYER_COMPLEXITY = (15, 100)

# Render cost estimates.
RENDER_MS_PER_PATH = 0.1
RENDER_MS_PER_COMMAND = 0.01
MEMORY_BASE_BYTES = 100
MEMORY_BYTES_PER_PATH = 50
MEMORY_BYTES_PER_COMMAND = 20
