from flask import Blueprint, request, jsonify

from halalgains.extensions import db
from halalgains.models import HydrationReminder
from halalgains.schemas import HydrationReminderSchema
from halalgains.services import hydration as hydration_service
from halalgains.utils.decorators import login_required

hydration_bp = Blueprint("hydration", __name__)
reminder_schema = HydrationReminderSchema()
reminder_update_schema = HydrationReminderSchema(partial=True)


def _own_reminder(reminder_id, user):
    reminder = db.get_or_404(HydrationReminder, reminder_id, description="Reminder not found")
    if reminder.user_id != user.id:
        return None, (jsonify({"msg": "Unauthorized"}), 403)
    return reminder, None


@hydration_bp.route("", methods=["GET"])
@login_required
def list_reminders(current_user):
    reminders = hydration_service.reminders_for(current_user)
    return jsonify({"reminders": [r.to_dict() for r in reminders]}), 200


@hydration_bp.route("", methods=["POST"])
@login_required
def create_reminder(current_user):
    data = reminder_schema.load(request.get_json(silent=True) or {})
    reminder = hydration_service.apply(HydrationReminder(user_id=current_user.id), data)
    db.session.add(reminder)
    db.session.commit()
    return jsonify({"msg": "Reminder created", "reminder": reminder.to_dict()}), 201


@hydration_bp.route("/<int:reminder_id>", methods=["PUT"])
@login_required
def update_reminder(reminder_id, current_user):
    reminder, error = _own_reminder(reminder_id, current_user)
    if error:
        return error
    data = reminder_update_schema.load(request.get_json(silent=True) or {})
    hydration_service.apply(reminder, data)
    db.session.commit()
    return jsonify({"msg": "Reminder updated", "reminder": reminder.to_dict()}), 200


@hydration_bp.route("/<int:reminder_id>/toggle", methods=["POST"])
@login_required
def toggle_reminder(reminder_id, current_user):
    reminder, error = _own_reminder(reminder_id, current_user)
    if error:
        return error
    reminder.is_active = not reminder.is_active
    db.session.commit()
    return jsonify({"msg": "Reminder updated", "reminder": reminder.to_dict()}), 200


@hydration_bp.route("/<int:reminder_id>", methods=["DELETE"])
@login_required
def delete_reminder(reminder_id, current_user):
    reminder, error = _own_reminder(reminder_id, current_user)
    if error:
        return error
    db.session.delete(reminder)
    db.session.commit()
    return jsonify({"msg": "Reminder deleted"}), 200
