"""Application-wide constants."""

APP_NAME = "PageComposer"
ORG_NAME = "PageComposer"

# Page defaults
DEFAULT_PAGE_WIDTH = 900
DEFAULT_PAGE_HEIGHT = 1600

# Undo/redo stack limit
UNDO_LIMIT = 400

# Snapping (page units / degrees)
SNAP_THRESHOLD = 8
ANGLE_SNAP_STEP = 15
CARDINAL_ANGLES = (0, 90, 180, 270)
CARDINAL_SNAP_TOLERANCE = 4
CARDINAL_GUIDE_TOLERANCE = 2

# Handles
HANDLE_TOLERANCE = 10
ROTATE_HANDLE_DISTANCE = 36
ROTATE_HANDLE_RADIUS = 12

# Resize floor, applies to both axes
MIN_LAYER_SIZE = 20

# Background image layers paint beneath everything else
BACKGROUND_Z_INDEX = -10_000

# Default text layer properties
DEFAULT_TEXT = "New text"
NEW_TEXT_PLACEHOLDER = "Double-click to edit"
DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_SIZE = 48
DEFAULT_TEXT_COLOR = "#ffffff"
DEFAULT_TEXT_X = 50
DEFAULT_TEXT_Y = 50

# New text is placed this far left/up of the page center
NEW_TEXT_CENTER_OFFSET_X = 120
NEW_TEXT_CENTER_OFFSET_Y = 24

# Default image layer properties
DEFAULT_IMAGE_WIDTH = 200
DEFAULT_IMAGE_HEIGHT = 200
OVERLAY_DEFAULT_X = 150
OVERLAY_DEFAULT_Y = 200

# Decoded overlays larger than this are scaled down to fit
IMAGE_MAX_WIDTH = 600
IMAGE_MAX_HEIGHT = 800
