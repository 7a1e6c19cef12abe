import pytest

from detection.motion.motion_types import Position, TrackerConfig
from session.event_manager import EventManager

# Exactly representable step: 3.125 velocity units per frame
STEP = 0.03125
HAND_LANDMARK_COUNT = 21


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def config():
    return TrackerConfig(threshold=0.8, smoothing_frames=5, min_duration_frames=5)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def event_manager():
    return EventManager()


@pytest.fixture
def make_hand():
    """Landmark list with wrist and palm at (x, y)."""
    def _make_hand(x, y=0.5):
        return [Position(x, y, 0.0) for _ in range(HAND_LANDMARK_COUNT)]
    return _make_hand


@pytest.fixture
def motion_path(make_hand):
    """Hand moving STEP per frame for `moving` frames, then holding still for `still` frames."""
    def _motion_path(moving, still=0, origin=0.0):
        xs = [origin + k * STEP for k in range(moving)]
        xs += [xs[-1]] * still
        return [make_hand(x) for x in xs]
    return _motion_path
