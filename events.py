"""
Project: Café Menu Service

Description:
Socket.IO server used to broadcast menu changes so that other open admin
dashboards know to refetch the list.
"""

import logging

from flask_socketio import SocketIO

logger = logging.getLogger(__name__)

# Created once without an app, bound inside create_app
socketio = SocketIO(cors_allowed_origins="*")


def emit_event(event_type, **payload):
    payload["type"] = event_type
    try:
        socketio.emit("event", payload)
    except Exception:
        # the write is already committed
        logger.exception("Failed to broadcast %s", event_type)
