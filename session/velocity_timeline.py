from collections import deque
from typing import Dict, List

from detection.motion.motion_types import FrameResult
from session.session_config import TIMELINE_MAX_POINTS


class VelocityTimeline:
    """Bounded per-frame history of smoothed velocities for both hands"""

    def __init__(self, max_points: int = TIMELINE_MAX_POINTS):
        self.points = deque(maxlen=max_points)

    def add_frame(self, result: FrameResult, timestamp: float) -> None:
        """
        Record the velocities of one analyzed frame.

        Args:
            result: Frame result from the motion session; absent hands count as 0
            timestamp: Session-relative time of the frame in seconds
        """
        self.points.append({
            'time': timestamp,
            'left_velocity': result.left.velocity if result.left else 0.0,
            'right_velocity': result.right.velocity if result.right else 0.0
        })

    def get_points(self) -> List[Dict[str, float]]:
        return list(self.points)

    def clear(self) -> None:
        self.points.clear()

    def __len__(self) -> int:
        return len(self.points)
