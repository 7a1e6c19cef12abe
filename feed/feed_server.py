import logging
import queue
import threading
from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit

from detection.motion.motion_types import FrameResult, MotionEvent

# Commands accepted from clients; executed by the application loop
RESET_SESSION = 'reset_session'
EXPORT_SESSION = 'export_session'


class FeedServer:
    """Flask-SocketIO server streaming motion events and hand readouts to browser clients"""

    def __init__(self, session, command_queue: queue.Queue, config, timeline=None):
        """
        Initialize feed server

        Args:
            session: MotionSession whose log and summary are served
            command_queue: Queue receiving client commands for the application loop
            config: Configuration object with server settings
            timeline: Optional VelocityTimeline served at /timeline
        """
        self.session = session
        self.command_queue = command_queue
        self.config = config
        self.timeline = timeline

        self.app = Flask(__name__)
        # Keep request logging out of the console
        werkzeug_logger = logging.getLogger('werkzeug')
        werkzeug_logger.setLevel(logging.ERROR)

        self.app.config['SECRET_KEY'] = config.FLASK_SECRET_KEY
        self.app.logger.disabled = True

        self.socketio = SocketIO(self.app, cors_allowed_origins="*", logger=False, engineio_logger=False)

        self.connected_clients = set()

        self._setup_routes()
        self._setup_socket_handlers()

        self.server_thread = None

    def _setup_routes(self):
        """Setup Flask routes"""
        @self.app.route('/events')
        def events():
            return jsonify(self.session.snapshot())

        @self.app.route('/summary')
        def summary():
            return jsonify(self.session.get_summary())

        @self.app.route('/timeline')
        def timeline():
            points = self.timeline.get_points() if self.timeline is not None else []
            return jsonify(points)

    def _setup_socket_handlers(self):
        """Setup SocketIO event handlers"""

        @self.socketio.on('connect')
        def handle_connect():
            print(f"FeedServer: Client connected: {request.sid}")
            self.connected_clients.add(request.sid)
            emit('status', self._status_payload())

        @self.socketio.on('disconnect')
        def handle_disconnect(*args):
            print(f"FeedServer: Client disconnected: {request.sid}")
            self.connected_clients.discard(request.sid)

        @self.socketio.on('get_status')
        def handle_get_status():
            emit('status', self._status_payload())

        @self.socketio.on(RESET_SESSION)
        def handle_reset_session():
            self.command_queue.put(RESET_SESSION)
            emit('command_ack', {'command': RESET_SESSION, 'status': 'queued'})

        @self.socketio.on(EXPORT_SESSION)
        def handle_export_session():
            self.command_queue.put(EXPORT_SESSION)
            emit('command_ack', {'command': EXPORT_SESSION, 'status': 'queued'})

    def _status_payload(self):
        summary = self.session.get_summary()
        return {
            'connected': True,
            'total_moves': summary['total_moves'],
            'event_count': summary['event_count'],
            'last_motion_hand': summary['last_motion_hand'],
            'moving': summary['moving']
        }

    def start(self):
        """Start the feed server in a background thread"""
        def run_server():
            self.socketio.run(
                self.app,
                host=self.config.SERVER_HOST,
                port=self.config.SERVER_PORT,
                debug=False,
                allow_unsafe_werkzeug=True
            )

        self.server_thread = threading.Thread(target=run_server, daemon=True)
        self.server_thread.start()

        print(f"FeedServer: Started on http://{self.config.SERVER_HOST}:{self.config.SERVER_PORT}")

    def emit_motion_event(self, event: MotionEvent):
        """Push a motion event to all connected clients"""
        self.socketio.emit('motion_event', event.to_dict())

    def emit_frame_update(self, result: FrameResult, timestamp: float):
        """Push the current readouts of both hands to all connected clients"""
        if not self.connected_clients:
            return

        self.socketio.emit('frame_update', {
            'timestamp': timestamp,
            'left': result.left.to_dict() if result.left else None,
            'right': result.right.to_dict() if result.right else None
        })

    def is_running(self):
        return self.server_thread is not None and self.server_thread.is_alive()

    def get_url(self):
        return f"http://{self.config.SERVER_HOST}:{self.config.SERVER_PORT}"

    def get_connected_client_count(self):
        return len(self.connected_clients)
