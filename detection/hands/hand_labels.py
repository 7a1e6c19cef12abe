"""
Mapping of detector output to left/right landmark lists.
"""

from typing import Any, List, Optional, Sequence, Tuple

from detection.motion.motion_types import Handedness, Position


def landmarks_to_positions(landmarks: Sequence[Any]) -> List[Position]:
    """Convert detector landmarks (objects with x/y/z) to plain positions."""
    return [Position.from_landmark(landmark) for landmark in landmarks]


def assign_hands(multi_hand_landmarks: Optional[Sequence[Any]],
                 multi_handedness: Optional[Sequence[Any]]) -> Tuple[Optional[List[Position]], Optional[List[Position]]]:
    """
    Split detected hands into left and right landmark lists.

    Uses the detector's own handedness label. When the same label is
    reported twice, the detection with the higher classification score wins.

    Args:
        multi_hand_landmarks: MediaPipe `multi_hand_landmarks` (each with `.landmark`)
        multi_handedness: MediaPipe `multi_handedness` (each with `.classification`)

    Returns:
        tuple: (left, right) position lists, None for a hand not detected
    """
    if not multi_hand_landmarks or not multi_handedness:
        return None, None

    hands = {Handedness.LEFT: None, Handedness.RIGHT: None}
    scores = {Handedness.LEFT: -1.0, Handedness.RIGHT: -1.0}

    for hand_landmarks, handedness in zip(multi_hand_landmarks, multi_handedness):
        classification = handedness.classification[0]
        try:
            hand = Handedness(classification.label)
        except ValueError:
            continue

        score = getattr(classification, 'score', 0.0)
        if score > scores[hand]:
            hands[hand] = landmarks_to_positions(hand_landmarks.landmark)
            scores[hand] = score

    return hands[Handedness.LEFT], hands[Handedness.RIGHT]
