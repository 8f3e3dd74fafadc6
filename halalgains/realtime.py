import logging

from flask import request
from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_socketio import emit, join_room, leave_room
from jwt.exceptions import PyJWTError

from halalgains.extensions import db, socketio
from halalgains.models import User
from halalgains.services.chat import find_conversation

logger = logging.getLogger(__name__)


def conversation_room(conversation_id):
    return f"conversation:{conversation_id}"


def user_room(user_id):
    return f"user:{user_id}"


def publish_message(message):
    socketio.emit("new_message", message.to_dict(), to=conversation_room(message.conversation_id))


def publish_to_user(user_id, event, payload):
    socketio.emit(event, payload, to=user_room(user_id))


def _user_from_token(token):
    if not token:
        return None
    try:
        identity = decode_token(token)["sub"]
    except (JWTExtendedException, PyJWTError) as e:
        logger.warning("Rejected socket token: %s", e)
        return None
    return db.session.get(User, int(identity))


def on_join_conversation(data):
    data = data or {}
    user = _user_from_token(data.get("token"))
    if not user:
        emit("error", {"msg": "Unauthorized"})
        return

    conversation, role = None, None
    if data.get("conversation_id") is not None:
        conversation, role = find_conversation(data["conversation_id"], user)
    if not conversation or role is None:
        emit("error", {"msg": "Conversation not found"})
        return

    join_room(conversation_room(conversation.id))
    logger.debug("Socket %s joined conversation %s", request.sid, conversation.id)
    emit("joined", {"conversation_id": conversation.id})


def on_leave_conversation(data):
    conversation_id = (data or {}).get("conversation_id")
    if conversation_id is not None:
        leave_room(conversation_room(conversation_id))
        emit("left", {"conversation_id": conversation_id})


def on_join_user(data):
    user = _user_from_token((data or {}).get("token"))
    if not user:
        emit("error", {"msg": "Unauthorized"})
        return

    join_room(user_room(user.id))
    emit("joined", {"user_id": user.id})


def register_socket_handlers():
    """Attach the socket events to the server built by the latest init_app."""
    socketio.on_event("join_conversation", on_join_conversation)
    socketio.on_event("leave_conversation", on_leave_conversation)
    socketio.on_event("join_user", on_join_user)
