import logging
from datetime import datetime

from halalgains.extensions import db
from halalgains.models import Conversation, Message, CoachProfile
from halalgains.utils.timefmt import format_message_time

logger = logging.getLogger(__name__)


def participant_role(conversation, user):
    """'client', 'coach' or None when the user is not part of the conversation."""
    if user.is_client and conversation.client_id == user.id:
        return "client"
    if user.is_coach and user.coach_profile and conversation.coach_id == user.coach_profile.id:
        return "coach"
    return None


def get_or_create_conversation(client_user, coach_id):
    """
    One conversation per (client, coach). An existing conversation the
    client had hidden is shown to them again.
    """
    coach = db.session.get(CoachProfile, coach_id)
    if not coach:
        return {"msg": "Coach not found"}, 404

    conversation = Conversation.query.filter_by(client_id=client_user.id, coach_id=coach.id).first()
    if conversation:
        if conversation.deleted_by_client:
            conversation.deleted_by_client = False
            db.session.commit()
        return {"conversation": conversation.to_dict(), "created": False}, 200

    conversation = Conversation(client_id=client_user.id, coach_id=coach.id)
    db.session.add(conversation)
    db.session.commit()
    logger.info("Conversation %s opened between user %s and coach %s", conversation.id, client_user.id, coach.id)
    return {"conversation": conversation.to_dict(), "created": True}, 201


def unread_count(conversation, user_id):
    return conversation.messages.filter(
        Message.sender_id != user_id,
        Message.is_read.is_(False),
    ).count()


def _other_party(conversation, role):
    if role == "client":
        coach = conversation.coach
        return {
            "id": coach.id,
            "user_id": coach.user_id,
            "name": coach.full_name,
            "photo": coach.main_photo,
        }

    client = conversation.client
    profile = client.client_profile
    return {
        "id": client.id,
        "user_id": client.id,
        "name": profile.full_name if profile else client.email,
        "photo": profile.profile_photo if profile else None,
    }


def list_conversations(user, now=None):
    if user.is_coach:
        if not user.coach_profile:
            return []
        query = Conversation.query.filter_by(coach_id=user.coach_profile.id, deleted_by_coach=False)
        role = "coach"
    else:
        query = Conversation.query.filter_by(client_id=user.id, deleted_by_client=False)
        role = "client"

    results = []
    for conversation in query.order_by(Conversation.updated_at.desc()).all():
        last = conversation.messages.order_by(None).order_by(Message.created_at.desc()).first()
        data = conversation.to_dict()
        data["other_party"] = _other_party(conversation, role)
        data["last_message"] = last.content if last else None
        data["last_message_at"] = last.created_at.isoformat() if last else None
        data["last_message_label"] = format_message_time(last.created_at, now) if last else ""
        data["unread_count"] = unread_count(conversation, user.id)
        results.append(data)
    return results


def read_messages(conversation, user):
    """Messages oldest first; everything the other side sent is marked read."""
    unread = conversation.messages.filter(
        Message.sender_id != user.id,
        Message.is_read.is_(False),
    ).all()
    for message in unread:
        message.is_read = True
    if unread:
        db.session.commit()

    return [message.to_dict() for message in conversation.messages.all()]


def send_message(conversation, sender, content):
    content = (content or "").strip()
    if not content:
        return None

    message = Message(conversation_id=conversation.id, sender_id=sender.id, content=content)
    db.session.add(message)

    # a new message brings the conversation back for both participants
    conversation.updated_at = datetime.utcnow()
    conversation.deleted_by_client = False
    conversation.deleted_by_coach = False
    db.session.commit()
    return message


def soft_delete(conversation, role):
    if role == "client":
        conversation.deleted_by_client = True
    elif role == "coach":
        conversation.deleted_by_coach = True
    else:
        raise ValueError(f"unknown participant role {role!r}")
    db.session.commit()
    return conversation


def mark_read(message, user):
    if message.sender_id == user.id:
        return False
    if not message.is_read:
        message.is_read = True
        db.session.commit()
    return True


def find_conversation(conversation_id, user):
    """(conversation, role); role is None when the user is not a participant."""
    conversation = db.session.get(Conversation, conversation_id)
    if not conversation:
        return None, None
    return conversation, participant_role(conversation, user)
