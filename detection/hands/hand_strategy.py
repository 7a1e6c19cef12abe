"""
Hand landmark strategy that manages MediaPipe Hands processing.
This strategy handles its own MediaPipe lifecycle through event hooks.
"""

import cv2
import mediapipe as mp
from typing import List, Optional, Tuple

from detection.detection_config import (
    MP_MAX_NUM_HANDS,
    MP_MIN_DETECTION_CONFIDENCE,
    MP_MIN_TRACKING_CONFIDENCE,
    MP_MODEL_COMPLEXITY
)
from detection.hands.hand_labels import assign_hands
from detection.motion.motion_types import Position
from session.event_manager import EventManager, SETUP, FRAME_RECEIVED, CLEANUP


class HandStrategy:
    """
    Landmark source backed by MediaPipe Hands.

    Processes camera frames and keeps the latest left/right landmark lists,
    which the application loop feeds to the motion session. The detector is
    only used between the 'setup' and 'cleanup' hooks.
    """

    def __init__(self, event_manager: EventManager):
        """
        Initialize hand strategy.

        Args:
            event_manager: Event manager for registering hooks
        """
        self.event_manager = event_manager
        self.mp_hands = None
        self.hands = None
        self.is_active = False

        self.latest_hands: Tuple[Optional[List[Position]], Optional[List[Position]]] = (None, None)

        self.register_hooks()

    def register_hooks(self) -> None:
        """Register event hooks for hand strategy."""
        self.event_manager.register_hook(SETUP, self.setup_mediapipe, priority=10)
        self.event_manager.register_hook(FRAME_RECEIVED, self.process_frame, priority=10)
        self.event_manager.register_hook(CLEANUP, self.cleanup_mediapipe, priority=10)

    def setup_mediapipe(self) -> None:
        """Initialize MediaPipe hand detection components."""
        try:
            print("HandStrategy: Initializing MediaPipe...")

            self.mp_hands = mp.solutions.hands
            self.hands = self.mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=MP_MAX_NUM_HANDS,
                model_complexity=MP_MODEL_COMPLEXITY,
                min_detection_confidence=MP_MIN_DETECTION_CONFIDENCE,
                min_tracking_confidence=MP_MIN_TRACKING_CONFIDENCE
            )

            self.is_active = True
            print("HandStrategy: MediaPipe initialized successfully")

        except Exception as e:
            print(f"HandStrategy: Error during setup: {e}")
            self.is_active = False

    def cleanup_mediapipe(self) -> None:
        """Clean up MediaPipe resources."""
        try:
            if self.hands:
                self.hands.close()
                self.hands = None

            self.mp_hands = None
            self.is_active = False
            self.latest_hands = (None, None)

            print("HandStrategy: MediaPipe cleanup completed")

        except Exception as e:
            print(f"HandStrategy: Error during cleanup: {e}")

    def process_frame(self, frame) -> None:
        """
        Detect hands in a camera frame.

        Args:
            frame: OpenCV camera frame (BGR format), already mirrored
        """
        if not self.is_active or not self.hands:
            return

        try:
            rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            results = self.hands.process(rgb_frame)
            self.latest_hands = assign_hands(results.multi_hand_landmarks, results.multi_handedness)

        except Exception as e:
            print(f"HandStrategy: Error processing frame: {e}")
            self.latest_hands = (None, None)

    def get_current_hands(self) -> Tuple[Optional[List[Position]], Optional[List[Position]]]:
        """
        Get the most recent left/right landmark lists.

        Returns:
            tuple: (left, right), each None when that hand is not detected
        """
        if not self.is_active:
            return None, None
        return self.latest_hands
