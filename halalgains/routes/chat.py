from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from halalgains.extensions import db
from halalgains.models import Message
from halalgains.realtime import publish_message
from halalgains.schemas import StartConversationSchema, SendMessageSchema
from halalgains.services import chat as chat_service
from halalgains.utils.decorators import login_required, client_required

chat_bp = Blueprint("chat", __name__)
start_schema = StartConversationSchema()
message_schema = SendMessageSchema()


def _participant_or_error(conversation_id, user):
    conversation, role = chat_service.find_conversation(conversation_id, user)
    if not conversation:
        return None, None, (jsonify({"msg": "Conversation not found"}), 404)
    if role is None:
        return None, None, (jsonify({"msg": "Unauthorized"}), 403)
    return conversation, role, None


@chat_bp.route("/conversations", methods=["POST"])
@client_required
def start_conversation(current_user):
    data = start_schema.load(request.get_json(silent=True) or {})
    payload, status = chat_service.get_or_create_conversation(current_user, data["coach_id"])
    return jsonify(payload), status


@chat_bp.route("/conversations", methods=["GET"])
@login_required
def list_conversations(current_user):
    return jsonify({"conversations": chat_service.list_conversations(current_user)}), 200


@chat_bp.route("/conversations/<int:conversation_id>/messages", methods=["GET"])
@login_required
def get_messages(conversation_id, current_user):
    conversation, _, error = _participant_or_error(conversation_id, current_user)
    if error:
        return error
    return jsonify({"messages": chat_service.read_messages(conversation, current_user)}), 200


@chat_bp.route("/conversations/<int:conversation_id>/messages", methods=["POST"])
@login_required
def send_message(conversation_id, current_user):
    conversation, _, error = _participant_or_error(conversation_id, current_user)
    if error:
        return error

    data = message_schema.load(request.get_json(silent=True) or {})
    try:
        message = chat_service.send_message(conversation, current_user, data["content"])
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("send_message failed for conversation %s", conversation_id)
        return jsonify({"msg": "Internal server error"}), 500

    if message is None:
        return jsonify({"msg": "Message content is required"}), 400

    publish_message(message)
    return jsonify({"msg": "Message sent successfully", "message": message.to_dict()}), 201


@chat_bp.route("/conversations/<int:conversation_id>", methods=["DELETE"])
@login_required
def delete_conversation(conversation_id, current_user):
    conversation, role, error = _participant_or_error(conversation_id, current_user)
    if error:
        return error

    chat_service.soft_delete(conversation, role)
    return jsonify({"msg": "Conversation deleted", "conversation": conversation.to_dict()}), 200


@chat_bp.route("/messages/<int:message_id>/read", methods=["POST"])
@login_required
def mark_message_read(message_id, current_user):
    message = db.get_or_404(Message, message_id, description="Message not found")
    _, _, error = _participant_or_error(message.conversation_id, current_user)
    if error:
        return error

    if not chat_service.mark_read(message, current_user):
        return jsonify({"msg": "Cannot mark your own message as read"}), 400
    return jsonify({"msg": "Message marked as read", "message": message.to_dict()}), 200
