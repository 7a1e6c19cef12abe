"""
Motion session coordination for both hands.
Drives the left and right trackers once per frame and keeps the ordered event log.
"""

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from detection.motion.hand_motion_tracker import HandMotionTracker
from detection.motion.motion_types import (
    EventKind,
    FrameResult,
    Handedness,
    HandReadout,
    MotionEvent,
    MotionTransition,
    TrackerConfig
)
from session.event_manager import EventManager, FRAME_ANALYZED, MOTION_EVENT, SESSION_RESET


class MotionSession:
    """
    Owns both hand trackers, the session clock origin and the event log.

    Event sequence numbers and motion ordinals are assigned here only, so
    ordering stays consistent across hands: within one frame the left hand
    is always processed before the right hand.
    """

    def __init__(self, config: TrackerConfig, event_manager: Optional[EventManager] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the session and stamp its start time.

        Args:
            config: Motion detection parameters shared by both hands
            event_manager: Optional event manager notified of events and resets
            clock: Time source in seconds; frame timestamps must use the same clock
        """
        self.config = config
        self.event_manager = event_manager
        self.clock = clock

        self.left_tracker = HandMotionTracker(Handedness.LEFT, config)
        self.right_tracker = HandMotionTracker(Handedness.RIGHT, config)

        self.events: List[MotionEvent] = []
        self.session_start_time = 0.0
        self.event_counter = 0
        self.move_order_counter = 0
        self.frame_count = 0

        self.reset_session()

    def reset_session(self) -> None:
        """Clear both hands and the event log; timestamps restart from now."""
        self.session_start_time = self.clock()
        self.event_counter = 0
        self.move_order_counter = 0
        self.frame_count = 0
        self.events = []
        self.left_tracker.reset()
        self.right_tracker.reset()

        self._trigger(SESSION_RESET, self.session_start_time)

    def process_frame(self, timestamp: float,
                      left_landmarks: Optional[Sequence[Any]],
                      right_landmarks: Optional[Sequence[Any]]) -> FrameResult:
        """
        Analyze one frame for both hands.

        Args:
            timestamp: Frame timestamp on the session clock
            left_landmarks: Left hand landmarks, or None if not visible
            right_landmarks: Right hand landmarks, or None if not visible

        Returns:
            FrameResult with the events emitted this frame and a readout per hand
        """
        events: List[MotionEvent] = []
        left_readout = self._analyze_hand(timestamp, self.left_tracker, left_landmarks, events)
        right_readout = self._analyze_hand(timestamp, self.right_tracker, right_landmarks, events)

        self.events.extend(events)
        self.frame_count += 1

        for event in events:
            self._trigger(MOTION_EVENT, event)

        result = FrameResult(events, left_readout, right_readout)
        self._trigger(FRAME_ANALYZED, result, timestamp)
        return result

    def _analyze_hand(self, timestamp: float, tracker: HandMotionTracker,
                      landmarks: Optional[Sequence[Any]], events: List[MotionEvent]) -> Optional[HandReadout]:
        readout, transition = tracker.update(timestamp, landmarks)
        if transition is not None:
            events.append(self._create_event(tracker.hand, transition))
        return readout

    def _create_event(self, hand: Handedness, transition: MotionTransition) -> MotionEvent:
        order_index = None
        if transition.kind is EventKind.START:
            self.move_order_counter += 1
            order_index = self.move_order_counter

        event = MotionEvent(
            sequence=self.event_counter,
            hand=hand,
            kind=transition.kind,
            timestamp=transition.timestamp - self.session_start_time,
            order_index=order_index,
            duration=transition.duration,
            distance=transition.distance
        )
        self.event_counter += 1
        return event

    def _trigger(self, event_name: str, *args) -> None:
        if self.event_manager:
            self.event_manager.trigger_event(event_name, *args)

    def get_events(self) -> List[MotionEvent]:
        """Get a copy of the event log in emission order."""
        return list(self.events)

    def snapshot(self) -> List[Dict[str, Any]]:
        """Get the event log as plain dictionaries for export."""
        return [event.to_dict() for event in list(self.events)]

    def get_tracker(self, hand: Handedness) -> HandMotionTracker:
        return self.left_tracker if hand is Handedness.LEFT else self.right_tracker

    def is_hand_moving(self, hand: Handedness) -> bool:
        return self.get_tracker(hand).is_moving()

    def get_total_moves(self) -> int:
        return sum(1 for event in list(self.events) if event.kind is EventKind.START)

    def get_elapsed_time(self) -> float:
        """Seconds since the session was last reset."""
        return self.clock() - self.session_start_time

    def get_summary(self) -> Dict[str, Any]:
        """
        Get session metrics as a dictionary.

        Returns:
            dict: Total moves, last motion hand, counts and per-hand moving flags
        """
        events = list(self.events)
        return {
            'total_moves': self.get_total_moves(),
            'last_motion_hand': events[-1].hand.value if events else None,
            'event_count': len(events),
            'frame_count': self.frame_count,
            'moving': {
                Handedness.LEFT.value: self.left_tracker.is_moving(),
                Handedness.RIGHT.value: self.right_tracker.is_moving()
            },
            'config': self.config.to_dict()
        }
