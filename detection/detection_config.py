# Detection Configuration Constants
# These values control the sensitivity and behavior of hand motion detection

import os

# Motion Detection Settings
MOTION_VELOCITY_THRESHOLD = float(os.getenv('MOTION_VELOCITY_THRESHOLD', '0.8'))  # Smoothed velocity needed to start a motion
SMOOTHING_FRAMES = int(os.getenv('SMOOTHING_FRAMES', '5'))  # Number of frames averaged for velocity
MIN_DURATION_FRAMES = int(os.getenv('MIN_DURATION_FRAMES', '5'))  # Consecutive frames required before a start/stop is accepted
STOP_THRESHOLD_RATIO = 0.5  # Stop threshold as a fraction of the start threshold (hysteresis)

# Velocity Settings
VELOCITY_SCALE = 100.0  # Scales normalized coordinate deltas to readable magnitudes

# Hand Landmark Indices (MediaPipe Hands)
WRIST_LANDMARK_INDEX = 0
PALM_LANDMARK_INDEX = 9  # Middle finger MCP

# MediaPipe Configuration
MP_MAX_NUM_HANDS = 2
MP_MIN_DETECTION_CONFIDENCE = float(os.getenv('MP_MIN_DETECTION_CONFIDENCE', '0.5'))
MP_MIN_TRACKING_CONFIDENCE = float(os.getenv('MP_MIN_TRACKING_CONFIDENCE', '0.5'))
MP_MODEL_COMPLEXITY = 1
