"""
Data types shared by the hand motion trackers and the motion session.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from detection.detection_config import (
    MOTION_VELOCITY_THRESHOLD,
    SMOOTHING_FRAMES,
    MIN_DURATION_FRAMES,
    STOP_THRESHOLD_RATIO
)


class TrackerConfigError(ValueError):
    """Raised when a tracker configuration is rejected."""


class Handedness(Enum):
    """Which hand a tracker follows"""
    LEFT = "Left"
    RIGHT = "Right"


class MotionState(Enum):
    """Qualitative motion state of one hand"""
    IDLE = "idle"
    MOVING = "moving"


class EventKind(Enum):
    """Kind of a motion event"""
    START = "START"
    STOP = "STOP"


@dataclass(frozen=True)
class Position:
    """A landmark position: normalized x/y plus depth-relative z."""
    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_landmark(cls, point: Any) -> 'Position':
        """
        Build a position from a landmark-like object.

        Args:
            point: Position, object with x/y/z attributes (e.g. a MediaPipe
                landmark) or a sequence of 2 or 3 coordinates

        Returns:
            Position instance
        """
        if isinstance(point, Position):
            return point
        if hasattr(point, 'x'):
            return cls(float(point.x), float(point.y), float(getattr(point, 'z', 0.0)))

        coords = list(point)
        z = float(coords[2]) if len(coords) > 2 else 0.0
        return cls(float(coords[0]), float(coords[1]), z)

    def midpoint(self, other: 'Position') -> 'Position':
        return Position(
            (self.x + other.x) / 2,
            (self.y + other.y) / 2,
            (self.z + other.z) / 2
        )

    def planar_distance(self, other: 'Position') -> float:
        """Euclidean distance over the x/y plane; z is ignored."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'z': self.z}


@dataclass(frozen=True)
class TrackerConfig:
    """
    Motion detection parameters, fixed for the lifetime of a session.

    Attributes:
        threshold: Smoothed velocity above which a motion may start
        smoothing_frames: Capacity of the velocity smoothing window
        min_duration_frames: Consecutive qualifying frames before a start/stop is accepted
    """
    threshold: float = MOTION_VELOCITY_THRESHOLD
    smoothing_frames: int = SMOOTHING_FRAMES
    min_duration_frames: int = MIN_DURATION_FRAMES

    def __post_init__(self):
        # Written as `not > 0` so NaN is rejected too
        if not self.threshold > 0:
            raise TrackerConfigError(f"threshold must be positive, got {self.threshold}")
        for name in ('smoothing_frames', 'min_duration_frames'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise TrackerConfigError(f"{name} must be an integer of at least 1, got {value!r}")

    @property
    def stop_threshold(self) -> float:
        return self.threshold * STOP_THRESHOLD_RATIO

    def to_dict(self) -> Dict[str, Any]:
        return {
            'threshold': self.threshold,
            'stop_threshold': self.stop_threshold,
            'smoothing_frames': self.smoothing_frames,
            'min_duration_frames': self.min_duration_frames
        }


@dataclass(frozen=True)
class MotionTransition:
    """A state change reported by a hand tracker, before the session numbers it."""
    kind: EventKind
    timestamp: float
    duration: Optional[float] = None
    distance: Optional[float] = None


@dataclass(frozen=True)
class MotionEvent:
    """
    One entry of the session event log.

    START events carry the session-wide motion ordinal (order_index);
    STOP events carry the duration and distance of the finished motion.
    Timestamps are relative to the session start.
    """
    sequence: int
    hand: Handedness
    kind: EventKind
    timestamp: float
    order_index: Optional[int] = None
    duration: Optional[float] = None
    distance: Optional[float] = None

    @property
    def event_id(self) -> str:
        return f"evt_{self.sequence}"

    def to_dict(self) -> Dict[str, Any]:
        """Plain data form used for export and the live feed."""
        data = {
            'id': self.event_id,
            'sequence': self.sequence,
            'hand': self.hand.value,
            'type': self.kind.value,
            'timestamp': self.timestamp
        }
        if self.kind is EventKind.START:
            data['order_index'] = self.order_index
        else:
            data['duration'] = self.duration
            data['distance'] = self.distance
        return data

    def describe(self) -> str:
        if self.kind is EventKind.START:
            return f"{self.hand.value} Motion #{self.order_index} @ {self.timestamp:.3f}s"
        return (f"{self.hand.value} Stopped @ {self.timestamp:.3f}s "
                f"(Dur: {self.duration:.2f}s | Dist: {self.distance:.1f})")


@dataclass(frozen=True)
class HandReadout:
    """Per-frame metrics for one visible hand."""
    hand: Handedness
    velocity: float
    is_moving: bool
    landmarks: Sequence[Any]

    def to_dict(self, include_landmarks: bool = False) -> Dict[str, Any]:
        data = {
            'hand': self.hand.value,
            'velocity': self.velocity,
            'is_moving': self.is_moving
        }
        if include_landmarks:
            data['landmarks'] = [Position.from_landmark(p).to_dict() for p in self.landmarks]
        return data


class FrameResult(NamedTuple):
    """Output of one session frame: new events plus a readout per hand (None if not visible)."""
    events: List[MotionEvent]
    left: Optional[HandReadout]
    right: Optional[HandReadout]
