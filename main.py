import cv2
import queue
from dotenv import load_dotenv

# Load environment variables before reading any configuration module
load_dotenv()

from session import session_config
from session.session_config import *
from detection.hands.hand_strategy import HandStrategy
from detection.motion.motion_types import FrameResult, MotionEvent, TrackerConfig
from export.session_exporter import SessionExporter
from feed.feed_server import FeedServer, RESET_SESSION, EXPORT_SESSION
from session.event_manager import (
    EventManager,
    SETUP,
    CLEANUP,
    FRAME_RECEIVED,
    FRAME_ANALYZED,
    MOTION_EVENT
)
from session.motion_session import MotionSession
from session.velocity_timeline import VelocityTimeline


class MotionTrackerApp:
    def __init__(self):
        # Event system
        self.event_manager = EventManager()

        # Camera setup
        self.cap = None

        # Motion session (tracking stays off until started)
        self.tracker_config = TrackerConfig()
        self.session = MotionSession(self.tracker_config, self.event_manager)
        self.is_tracking = False

        # Landmark source
        self.hand_strategy = HandStrategy(self.event_manager)

        # Velocity history for charting clients
        self.timeline = VelocityTimeline()

        # Export of event logs
        self.exporter = SessionExporter(self.event_manager)

        # Live feed, commands from clients are run on this thread
        self.command_queue = queue.Queue()
        self.feed_server = None
        if ENABLE_FEED_SERVER:
            self.feed_server = FeedServer(self.session, self.command_queue, session_config, self.timeline)

        self._setup_listeners()

        print(f"Tracker config: threshold={self.tracker_config.threshold}, "
              f"smoothing={self.tracker_config.smoothing_frames}, "
              f"debounce={self.tracker_config.min_duration_frames}")

    def _setup_listeners(self):
        """Wire session hooks to console output, timeline and feed."""
        self.event_manager.register_hook(MOTION_EVENT, self._on_motion_event)
        self.event_manager.register_hook(FRAME_ANALYZED, self._on_frame_analyzed)

    def _on_motion_event(self, event: MotionEvent):
        print(event.describe())
        if self.feed_server:
            self.feed_server.emit_motion_event(event)

    def _on_frame_analyzed(self, result: FrameResult, timestamp: float):
        relative_time = timestamp - self.session.session_start_time
        self.timeline.add_frame(result, relative_time)
        if self.feed_server:
            self.feed_server.emit_frame_update(result, relative_time)

    def toggle_tracking(self):
        """Start or stop tracking; starting always begins a fresh session."""
        if not self.is_tracking:
            self.reset_session()
            if not self.exporter.is_recording():
                self.exporter.start_recording(self.tracker_config.to_dict())
        self.is_tracking = not self.is_tracking
        print("Tracking started" if self.is_tracking else "Tracking stopped")

    def reset_session(self):
        self.session.reset_session()
        self.timeline.clear()

    def export_session(self):
        events = self.session.snapshot()
        if not events:
            print("No events to export")
            return None
        return self.exporter.export_snapshot(events)

    def process_command_queue(self):
        """Run commands queued by feed clients."""
        while True:
            try:
                command = self.command_queue.get_nowait()
            except queue.Empty:
                break

            if command == RESET_SESSION:
                self.reset_session()
                print("Session reset (feed client)")
            elif command == EXPORT_SESSION:
                self.export_session()

    def run(self):
        """Main capture loop"""
        print("Starting Hand Motion Tracker...")

        self.event_manager.trigger_event(SETUP)
        if self.feed_server:
            self.feed_server.start()

        self.cap = cv2.VideoCapture(CAMERA_INDEX)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)

        if not self.cap.isOpened():
            print("Error: Could not open camera")
            return

        print("Keys: [s] start/stop tracking  [r] reset  [e] export  [q] quit")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    print("Error: Could not read frame")
                    break

                # Mirror so detector handedness matches the user's hands
                frame = cv2.flip(frame, 1)

                self.event_manager.trigger_event(FRAME_RECEIVED, frame)

                if self.is_tracking:
                    left, right = self.hand_strategy.get_current_hands()
                    self.session.process_frame(self.session.clock(), left, right)

                self.process_command_queue()

                cv2.imshow(WINDOW_TITLE, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                elif key == ord('s'):
                    self.toggle_tracking()
                elif key == ord('r'):
                    self.is_tracking = False
                    self.reset_session()
                    print("Session reset")
                elif key == ord('e'):
                    self.export_session()

        except KeyboardInterrupt:
            print("\nTracker interrupted by user")

        finally:
            self.exporter.cleanup()

            self.event_manager.trigger_event(CLEANUP)
            if self.cap:
                self.cap.release()
                self.cap = None
            cv2.destroyAllWindows()
            summary = self.session.get_summary()
            print(f"\nTotal Moves: {summary['total_moves']}")
            print(f"Total Events: {summary['event_count']}")


if __name__ == "__main__":
    app = MotionTrackerApp()
    app.run()
