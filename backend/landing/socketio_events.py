from flask_socketio import join_room, leave_room, emit
from flask import current_app
from landing import socketio
from landing.services.memory.controller import ROOM


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_memory(data=None):
    """Subscribe this socket to game pushes and send the current board."""
    join_room(ROOM)
    emit('joined', {'room': ROOM})
    emit('state_update', current_app.extensions['memory_game'].snapshot())


def handle_leave_memory(data=None):
    leave_room(ROOM)
    emit('left', {'room': ROOM})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_memory', handle_join_memory, namespace='/ws')
    socketio.on_event('leave_memory', handle_leave_memory, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_memory', handle_join_memory, namespace='/')
        socketio.on_event('leave_memory', handle_leave_memory, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
