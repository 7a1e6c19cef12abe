from types import SimpleNamespace

from detection.hands.hand_labels import assign_hands
from detection.motion.motion_types import Position


def detected_hand(x):
    return SimpleNamespace(landmark=[SimpleNamespace(x=x, y=0.5, z=0.0)] * 21)


def handedness(label, score=0.9):
    return SimpleNamespace(classification=[SimpleNamespace(label=label, score=score)])


def test_no_detections():
    assert assign_hands(None, None) == (None, None)
    assert assign_hands([], []) == (None, None)


def test_hands_are_split_by_label():
    left, right = assign_hands(
        [detected_hand(0.7), detected_hand(0.2)],
        [handedness('Right'), handedness('Left')]
    )

    assert left[0] == Position(0.2, 0.5, 0.0)
    assert right[0] == Position(0.7, 0.5, 0.0)
    assert len(left) == 21


def test_single_hand_leaves_other_absent():
    left, right = assign_hands([detected_hand(0.3)], [handedness('Left')])

    assert left is not None
    assert right is None


def test_duplicate_label_keeps_higher_score():
    left, right = assign_hands(
        [detected_hand(0.1), detected_hand(0.9)],
        [handedness('Left', 0.6), handedness('Left', 0.95)]
    )

    assert left[0].x == 0.9
    assert right is None


def test_unknown_label_is_ignored():
    assert assign_hands([detected_hand(0.5)], [handedness('Unknown')]) == (None, None)
