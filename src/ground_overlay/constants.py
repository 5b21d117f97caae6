"""Package-wide constants and default values."""

# Ground overlay defaults
DEFAULT_Z_INDEX = 0
DEFAULT_WIDTH_M = 0.0  # meters
DEFAULT_HEIGHT_M = 0.0  # meters
DEFAULT_BEARING_DEG = 0.0  # clockwise from north
DEFAULT_TRANSPARENCY = 0.0  # 0.0 opaque, 1.0 fully transparent

# Marker hue limits (degrees on the colour wheel)
MIN_MARKER_HUE = 0.0
MAX_MARKER_HUE = 360.0  # exclusive

# Wire keys written by GroundOverlay.to_json
KEY_ID = "groundOverlayId"
KEY_CONSUME_TAP_EVENTS = "consumeTapEvents"
KEY_TRANSPARENCY = "transparency"
KEY_BEARING = "bearing"
KEY_VISIBLE = "visible"
KEY_Z_INDEX = "zIndex"
KEY_HEIGHT = "height"
KEY_ANCHOR = "anchor"
KEY_BOUNDS = "bounds"
KEY_BITMAP = "bitmap"
KEY_WIDTH = "width"
KEY_LOCATION = "location"

OVERLAY_JSON_KEYS = (
    KEY_ID,
    KEY_CONSUME_TAP_EVENTS,
    KEY_TRANSPARENCY,
    KEY_BEARING,
    KEY_VISIBLE,
    KEY_Z_INDEX,
    KEY_HEIGHT,
    KEY_ANCHOR,
    KEY_BOUNDS,
    KEY_BITMAP,
    KEY_WIDTH,
    KEY_LOCATION,
)
