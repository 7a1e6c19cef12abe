"""Configuration for session export and event recording."""

import os
from pathlib import Path

# Export directory
EXPORT_DIR = Path(os.getenv('MOTION_EXPORT_DIR', 'exports'))

# File names
SNAPSHOT_PREFIX = "motion-session-"
EVENTS_FILENAME = "events.jsonl"
METADATA_FILENAME = "metadata.json"

# Recording settings
BUFFER_SIZE = 100  # Number of lines to buffer before writing to JSONL files
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
