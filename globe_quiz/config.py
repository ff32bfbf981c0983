import logging
import os

# ==================== Data Source ====================
GEOJSON_URL = os.environ.get(
    "GLOBE_QUIZ_GEOJSON_URL",
    "https://raw.githubusercontent.com/nvkelso/natural-earth-vector/master/geojson/ne_110m_admin_0_countries.geojson",
)
REQUEST_TIMEOUT = 10

# Natural Earth marks rows without an ISO 3166 code with this value
INVALID_ISO = "-99"
EXCLUDED_ISO = frozenset({"AQ"})

# Rows that carry INVALID_ISO but are real, playable countries
ISO_OVERRIDES = {
    "France": "FR",
    "Norway": "NO",
    "Kosovo": "XK",
}

# ==================== Globe & Camera ====================
# Must match the radius the renderer uses to place polygons
GLOBE_RADIUS = 100.0

CAMERA_FOV = 45.0
CAMERA_DISTANCE = 350.0
MIN_CAMERA_DISTANCE = 150.0
MAX_CAMERA_DISTANCE = 500.0
IMAGE_WIDTH, IMAGE_HEIGHT = 700, 700

# ==================== Logging ====================
LOG_LEVEL = os.environ.get("GLOBE_QUIZ_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    """Install a basic handler for the app. Safe to call on every Streamlit rerun."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("globe_quiz").setLevel(level or LOG_LEVEL)
