# Session Configuration Constants
# These values control the application loop, the velocity timeline and the live feed

import os

# Camera Settings
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
CAMERA_INDEX = int(os.getenv('CAMERA_INDEX', '0'))  # Default camera device index
WINDOW_TITLE = 'Hand Motion Tracker'

# Timeline Settings
TIMELINE_MAX_POINTS = 300  # Frames of velocity history kept for charting

# Feed Server Settings
ENABLE_FEED_SERVER = os.getenv('ENABLE_FEED_SERVER', 'true').lower() in ('1', 'true', 'yes')
SERVER_HOST = os.getenv('SERVER_HOST', '0.0.0.0')
SERVER_PORT = int(os.getenv('SERVER_PORT', '5000'))
FLASK_SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'hand-motion-secret')
