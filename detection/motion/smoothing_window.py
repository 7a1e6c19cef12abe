from collections import deque

from detection.motion.motion_types import TrackerConfigError


class SmoothingWindow:
    """Moving average over the most recent per-frame speed samples"""

    def __init__(self, size: int):
        """
        Initialize the smoothing window

        Args:
            size (int): Number of samples kept; the oldest is dropped first
        """
        if size < 1:
            raise TrackerConfigError(f"smoothing window size must be at least 1, got {size}")

        self.size = size
        self.samples = deque(maxlen=size)

    def push(self, sample: float) -> None:
        self.samples.append(sample)

    def average(self) -> float:
        """Mean of the current samples, 0.0 when empty."""
        if not self.samples:
            return 0.0
        return sum(self.samples) / len(self.samples)

    def reset(self) -> None:
        self.samples.clear()

    def __len__(self) -> int:
        return len(self.samples)
