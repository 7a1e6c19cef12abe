"""
Per-hand motion tracking: velocity smoothing and start/stop hysteresis.
"""

from typing import Any, Optional, Sequence, Tuple

from detection.detection_config import (
    VELOCITY_SCALE,
    WRIST_LANDMARK_INDEX,
    PALM_LANDMARK_INDEX
)
from detection.motion.motion_types import (
    EventKind,
    Handedness,
    HandReadout,
    MotionState,
    MotionTransition,
    Position,
    TrackerConfig
)
from detection.motion.smoothing_window import SmoothingWindow


def has_reference_landmarks(landmarks: Optional[Sequence[Any]]) -> bool:
    """Check that a landmark list contains both reference landmarks."""
    if not landmarks:
        return False
    return len(landmarks) > max(WRIST_LANDMARK_INDEX, PALM_LANDMARK_INDEX)


class HandMotionTracker:
    """
    Tracks motion of a single hand across frames.

    Converts per-frame landmark lists into a smoothed velocity and detects
    motion start/stop with asymmetric thresholds (stop = start x 0.5) and a
    debounce of `min_duration_frames` consecutive frames on both edges.
    Transitions are reported to the caller; numbering them is left to the
    session.
    """

    def __init__(self, hand: Handedness, config: TrackerConfig):
        """
        Initialize the hand motion tracker.

        Args:
            hand: Which hand this tracker follows
            config: Motion detection parameters
        """
        self.hand = hand
        self.config = config
        self.window = SmoothingWindow(config.smoothing_frames)

        self.state = MotionState.IDLE
        self.motion_start_time: Optional[float] = None
        self.last_position: Optional[Position] = None
        self.total_distance = 0.0
        self.frames_above_threshold = 0
        self.frames_below_threshold = 0

    def reset(self) -> None:
        """Reset tracker to its initial idle state."""
        self.window.reset()
        self.state = MotionState.IDLE
        self.motion_start_time = None
        self.last_position = None
        self.total_distance = 0.0
        self.frames_above_threshold = 0
        self.frames_below_threshold = 0

    def is_moving(self) -> bool:
        return self.state is MotionState.MOVING

    def get_smoothed_velocity(self) -> float:
        return self.window.average()

    def update(self, timestamp: float,
               landmarks: Optional[Sequence[Any]]) -> Tuple[Optional[HandReadout], Optional[MotionTransition]]:
        """
        Process one frame for this hand.

        Args:
            timestamp: Frame timestamp on the session clock
            landmarks: Landmark list for this hand, or None if not detected

        Returns:
            tuple: (readout, transition) where readout is None for an absent
                hand and transition is None unless the motion state changed
        """
        if not has_reference_landmarks(landmarks):
            # Absent hand counts as zero motion; position and state are kept
            self.window.push(0.0)
            return None, None

        current_position = self._reference_point(landmarks)

        instantaneous_velocity = 0.0
        if self.last_position is not None:
            instantaneous_velocity = current_position.planar_distance(self.last_position) * VELOCITY_SCALE

        self.last_position = current_position
        self.window.push(instantaneous_velocity)
        smoothed_velocity = self.window.average()

        if self.state is MotionState.IDLE:
            transition = self._check_motion_start(timestamp, smoothed_velocity)
        else:
            transition = self._check_motion_stop(timestamp, instantaneous_velocity, smoothed_velocity)

        readout = HandReadout(
            hand=self.hand,
            velocity=smoothed_velocity,
            is_moving=self.is_moving(),
            landmarks=landmarks
        )
        return readout, transition

    def _reference_point(self, landmarks: Sequence[Any]) -> Position:
        """Midpoint of wrist and middle finger MCP, steadier than either joint alone."""
        wrist = Position.from_landmark(landmarks[WRIST_LANDMARK_INDEX])
        palm = Position.from_landmark(landmarks[PALM_LANDMARK_INDEX])
        return wrist.midpoint(palm)

    def _check_motion_start(self, timestamp: float, smoothed_velocity: float) -> Optional[MotionTransition]:
        if smoothed_velocity <= self.config.threshold:
            self.frames_above_threshold = 0
            return None

        self.frames_above_threshold += 1
        if self.frames_above_threshold < self.config.min_duration_frames:
            return None

        self.state = MotionState.MOVING
        self.motion_start_time = timestamp
        self.total_distance = 0.0
        self._clear_debounce()
        return MotionTransition(kind=EventKind.START, timestamp=timestamp)

    def _check_motion_stop(self, timestamp: float, instantaneous_velocity: float,
                           smoothed_velocity: float) -> Optional[MotionTransition]:
        # Raw path length, not the smoothed proxy
        self.total_distance += instantaneous_velocity

        if smoothed_velocity >= self.config.stop_threshold:
            self.frames_below_threshold = 0
            return None

        self.frames_below_threshold += 1
        if self.frames_below_threshold < self.config.min_duration_frames:
            return None

        duration = timestamp - self.motion_start_time
        transition = MotionTransition(
            kind=EventKind.STOP,
            timestamp=timestamp,
            duration=duration,
            distance=self.total_distance
        )

        self.state = MotionState.IDLE
        self.motion_start_time = None
        self._clear_debounce()
        return transition

    def _clear_debounce(self) -> None:
        self.frames_above_threshold = 0
        self.frames_below_threshold = 0
