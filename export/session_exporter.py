"""Exports motion sessions: JSON snapshots and JSONL event recordings."""

import json
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from detection.motion.motion_types import EventKind, MotionEvent
from export import export_config as config
from session.event_manager import EventManager, MOTION_EVENT, SESSION_RESET


class SessionExporter:
    """Writes session event logs to disk, on demand or as they happen."""

    def __init__(self, event_manager: EventManager, export_dir: Optional[Path] = None):
        """Initialize the session exporter.

        Args:
            event_manager: Event manager for subscribing to motion events
            export_dir: Directory receiving exports (defaults to config.EXPORT_DIR)
        """
        self.event_manager = event_manager
        self.export_dir = Path(export_dir) if export_dir is not None else config.EXPORT_DIR
        self.is_recording_flag = False
        self.session_dir: Optional[Path] = None
        self.start_time: Optional[float] = None
        self.recorded_events = 0
        self.recorded_moves = 0

        self.event_buffer: List[Dict[str, Any]] = []
        self.session_metadata: Dict[str, Any] = {}

        self._setup_event_listeners()

    def _setup_event_listeners(self):
        """Subscribe to session events."""
        self.event_manager.register_hook(MOTION_EVENT, self._on_motion_event)
        self.event_manager.register_hook(SESSION_RESET, self._on_session_reset)

    def export_snapshot(self, events: List[Dict[str, Any]]) -> Optional[Path]:
        """Write the full event log as a single JSON document.

        Args:
            events: Event log snapshot (see MotionSession.snapshot)

        Returns:
            Path of the written file, or None if writing failed
        """
        timestamp = datetime.now().strftime(config.TIMESTAMP_FORMAT)
        snapshot_path = self.export_dir / f"{config.SNAPSHOT_PREFIX}{timestamp}.json"

        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            with open(snapshot_path, 'w') as f:
                json.dump(events, f, indent=2)
        except OSError as e:
            print(f"SessionExporter: Could not export session: {e}")
            return None

        print(f"Session exported: {snapshot_path} ({len(events)} events)")
        return snapshot_path

    def start_recording(self, tracker_config: Optional[Dict[str, Any]] = None) -> bool:
        """Start streaming motion events to a new session directory.

        Args:
            tracker_config: Tracker configuration snapshot stored in the metadata

        Returns:
            True if recording started successfully, False otherwise
        """
        if self.is_recording_flag:
            print("Already recording!")
            return False

        timestamp = datetime.now().strftime(config.TIMESTAMP_FORMAT)
        session_id = f"session_{timestamp}"
        session_dir = self.export_dir / session_id

        try:
            session_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"SessionExporter: Could not create {session_dir}: {e}")
            return False

        self.session_dir = session_dir
        self.start_time = time.time()
        self.recorded_events = 0
        self.recorded_moves = 0
        self.event_buffer.clear()
        self.session_metadata = {
            "session_id": session_id,
            "start_time": datetime.now().isoformat(),
            "tracker_config": tracker_config or {}
        }

        self.is_recording_flag = True
        print(f"Recording started: {session_id}")
        return True

    def stop_recording(self) -> Optional[Path]:
        """Stop the current recording and write its metadata.

        Returns:
            Path to the session directory, or None if not recording
        """
        if not self.is_recording_flag:
            return None

        self._flush_events()

        if self.start_time:
            self.session_metadata["duration_seconds"] = round(time.time() - self.start_time, 2)
        self.session_metadata["event_count"] = self.recorded_events
        self.session_metadata["total_moves"] = self.recorded_moves

        metadata_path = self.session_dir / config.METADATA_FILENAME
        with open(metadata_path, 'w') as f:
            json.dump(self.session_metadata, f, indent=2)

        session_dir = self.session_dir
        print(f"Recording stopped: {session_dir.name}")
        print(f"Events: {self.recorded_events}, Moves: {self.recorded_moves}")

        self.is_recording_flag = False
        self.session_dir = None
        self.start_time = None

        return session_dir

    def _on_motion_event(self, event: MotionEvent):
        """Buffer a motion event while recording."""
        if not self.is_recording_flag:
            return

        self.event_buffer.append(event.to_dict())
        self.recorded_events += 1
        if event.kind is EventKind.START:
            self.recorded_moves += 1

        if len(self.event_buffer) >= config.BUFFER_SIZE:
            self._flush_events()

    def _on_session_reset(self, session_start_time: float):
        """Mark a session reset in the recording; later timestamps use the new origin."""
        if not self.is_recording_flag:
            return

        self.event_buffer.append({
            "type": "RESET",
            "recording_time": round(self.get_recording_time(), 3)
        })

    def _flush_events(self):
        """Write event buffer to file."""
        if not self.event_buffer or not self.session_dir:
            return

        events_path = self.session_dir / config.EVENTS_FILENAME
        with open(events_path, 'a') as f:
            for record in self.event_buffer:
                f.write(json.dumps(record) + '\n')

        self.event_buffer.clear()

    def is_recording(self) -> bool:
        return self.is_recording_flag

    def get_recording_time(self) -> float:
        """Get current recording duration in seconds, or 0 if not recording."""
        if not self.is_recording_flag or not self.start_time:
            return 0.0
        return time.time() - self.start_time

    def cleanup(self):
        """Clean up resources."""
        if self.is_recording_flag:
            self.stop_recording()
