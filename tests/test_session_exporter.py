import json

import pytest

from detection.motion.motion_types import EventKind, Handedness, MotionEvent
from export.session_exporter import SessionExporter
from session.event_manager import MOTION_EVENT, SESSION_RESET


def start_event(sequence, order_index):
    return MotionEvent(sequence=sequence, hand=Handedness.LEFT, kind=EventKind.START,
                       timestamp=float(sequence), order_index=order_index)


def stop_event(sequence):
    return MotionEvent(sequence=sequence, hand=Handedness.LEFT, kind=EventKind.STOP,
                       timestamp=float(sequence), duration=1.0, distance=12.5)


@pytest.fixture
def exporter(event_manager, tmp_path):
    return SessionExporter(event_manager, export_dir=tmp_path / 'exports')


def test_export_snapshot_writes_json(exporter, tmp_path):
    events = [start_event(0, 1).to_dict(), stop_event(1).to_dict()]

    path = exporter.export_snapshot(events)

    assert path.parent == tmp_path / 'exports'
    assert path.name.startswith('motion-session-')
    assert path.suffix == '.json'
    assert json.loads(path.read_text()) == events


def test_events_are_ignored_when_not_recording(exporter, event_manager):
    event_manager.trigger_event(MOTION_EVENT, start_event(0, 1))

    assert exporter.event_buffer == []
    assert exporter.stop_recording() is None


def test_recording_writes_events_and_metadata(exporter, event_manager):
    assert exporter.start_recording({'threshold': 0.8})
    assert exporter.is_recording()
    assert not exporter.start_recording()

    event_manager.trigger_event(MOTION_EVENT, start_event(0, 1))
    event_manager.trigger_event(MOTION_EVENT, stop_event(1))
    event_manager.trigger_event(SESSION_RESET, 0.0)
    event_manager.trigger_event(MOTION_EVENT, start_event(0, 1))

    session_dir = exporter.stop_recording()

    assert not exporter.is_recording()
    lines = [json.loads(line) for line in (session_dir / 'events.jsonl').read_text().splitlines()]
    assert [line['type'] for line in lines] == ['START', 'STOP', 'RESET', 'START']
    assert lines[1]['distance'] == 12.5

    metadata = json.loads((session_dir / 'metadata.json').read_text())
    assert metadata['tracker_config'] == {'threshold': 0.8}
    assert metadata['event_count'] == 3
    assert metadata['total_moves'] == 2
    assert metadata['session_id'] == session_dir.name


def test_cleanup_stops_active_recording(exporter):
    exporter.start_recording()
    exporter.cleanup()

    assert not exporter.is_recording()
    assert exporter.get_recording_time() == 0.0
