"""
Settings shared by the codecs, the transforms and the viewer.
Plain module constants; a few can be overridden from the environment.
"""

import os

# Logging
LOG_LEVEL = os.environ.get("BMPLAB_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Saving
SAVE_SUFFIX = os.environ.get("BMPLAB_SAVE_SUFFIX", "_modified")

# Editor defaults
DEFAULT_BRIGHTNESS_STEP = 20
DEFAULT_THRESHOLD = 128
BRIGHTNESS_RANGE = (-255, 255)

# Viewer
VIEW_WIDTH = 300
VIEW_HEIGHT = 300
SCALE_RANGE = (10, 200)   # slider percent
