"""Fixed constants: logical canvas, zoom limits, hit tolerance, quiz sizing, colors."""

# Logical canvas the sky is mapped onto before zoom and pan (pixels)
LOGICAL_WIDTH = 1000.0
LOGICAL_HEIGHT = 500.0

# Sky coordinate ranges
HOURS_PER_CIRCLE = 24.0
DEC_MAX_DEGREES = 90.0
DEC_SPAN_DEGREES = 180.0

# Zoom
MIN_ZOOM = 0.5
MAX_ZOOM = 10.0
WHEEL_ZOOM_IN = 1.1
WHEEL_ZOOM_OUT = 0.9
BUTTON_ZOOM_STEP = 1.5

# Star glyph sizing: radius = max(MIN, BASE - mag * SLOPE) * sqrt(zoom)
STAR_RADIUS_BASE = 4.0
STAR_RADIUS_SLOPE = 0.3
STAR_RADIUS_MIN = 0.5
NAMED_STAR_SCALE = 1.2
GLOW_RADIUS_SCALE = 2.0

# Stars projected further than this outside the canvas are culled (pixels)
CULL_MARGIN = 10.0

# Hit testing: tolerance = max(radius * SCALE, MIN)
HIT_RADIUS_SCALE = 3.0
HIT_RADIUS_MIN = 15.0

# Grid overlay
GRID_RA_STEP_HOURS = 2
GRID_DEC_STEP_DEGREES = 30
GRID_LABEL_OFFSET = 5.0
GRID_RA_LABEL_Y = 15.0
GRID_LINE_WIDTH = 1.0
GRID_FONT = '12px sans-serif'

# Quiz
DISTRACTOR_COUNT = 3
NEARBY_POOL_SIZE = 10
RANDOM_POOL_SIZE = 10
AUTO_CLOSE_DELAY_MS = 2000.0

# Magnitude filter default and catalog sentinels
DEFAULT_MAX_MAGNITUDE = 6.0
MISSING_MAGNITUDE = 10.0
MISSING_COORDINATE = 0.0

# Colors as '#rrggbb' or 'rgba(r, g, b, a)' strings (canvas conventions)
BACKGROUND_COLOR = '#000'
GRID_LINE_COLOR = '#1a3a5c'
GRID_LABEL_COLOR = '#4a6a8c'
STAR_COLOR = '#fff'
GLOW_STOPS = (
    (0.0, '#fff'),
    (0.5, 'rgba(200, 220, 255, 0.5)'),
    (1.0, 'rgba(100, 150, 255, 0)'),
)
