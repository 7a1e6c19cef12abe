import queue
from types import SimpleNamespace

import pytest

from feed.feed_server import FeedServer, RESET_SESSION, EXPORT_SESSION
from session.motion_session import MotionSession
from session.velocity_timeline import VelocityTimeline


@pytest.fixture
def session(config, clock, motion_path):
    session = MotionSession(config, clock=clock)
    for timestamp, landmarks in enumerate(motion_path(10)):
        session.process_frame(float(timestamp), landmarks, None)
    return session


@pytest.fixture
def server(session):
    config = SimpleNamespace(FLASK_SECRET_KEY='test', SERVER_HOST='127.0.0.1', SERVER_PORT=5999)
    timeline = VelocityTimeline()
    return FeedServer(session, queue.Queue(), config, timeline)


def test_events_endpoint_returns_snapshot(server, session):
    response = server.app.test_client().get('/events')

    assert response.status_code == 200
    assert response.get_json() == session.snapshot()


def test_summary_and_timeline_endpoints(server):
    client = server.app.test_client()

    summary = client.get('/summary').get_json()
    assert summary['total_moves'] == 1
    assert summary['moving']['Left'] is True

    assert client.get('/timeline').get_json() == []


def test_connect_sends_status(server):
    client = server.socketio.test_client(server.app)

    received = client.get_received()
    assert received[0]['name'] == 'status'
    status = received[0]['args'][0]
    assert status['connected'] is True
    assert status['total_moves'] == 1
    assert status['last_motion_hand'] == 'Left'
    assert server.get_connected_client_count() == 1

    client.disconnect()
    assert server.get_connected_client_count() == 0


def test_commands_are_queued_for_the_main_loop(server):
    client = server.socketio.test_client(server.app)
    client.get_received()

    client.emit(RESET_SESSION)
    client.emit(EXPORT_SESSION)

    assert server.command_queue.get_nowait() == RESET_SESSION
    assert server.command_queue.get_nowait() == EXPORT_SESSION
    acks = [message['args'][0] for message in client.get_received() if message['name'] == 'command_ack']
    assert acks == [
        {'command': RESET_SESSION, 'status': 'queued'},
        {'command': EXPORT_SESSION, 'status': 'queued'}
    ]


def test_server_not_running_until_started(server):
    assert not server.is_running()
    assert server.get_url() == 'http://127.0.0.1:5999'


def test_frame_update_reaches_connected_client(server, session, make_hand):
    client = server.socketio.test_client(server.app)
    client.get_received()

    result = session.process_frame(10.0, make_hand(9 * 0.03125), None)
    server.emit_frame_update(result, 10.0)

    updates = [m['args'][0] for m in client.get_received() if m['name'] == 'frame_update']
    assert updates == [{
        'timestamp': 10.0,
        'left': {'hand': 'Left', 'velocity': result.left.velocity, 'is_moving': True},
        'right': None
    }]


def test_motion_event_is_pushed_as_plain_data(server, session):
    client = server.socketio.test_client(server.app)
    client.get_received()

    event = session.get_events()[0]
    server.emit_motion_event(event)

    pushed = [m['args'][0] for m in client.get_received() if m['name'] == 'motion_event']
    assert pushed == [event.to_dict()]
