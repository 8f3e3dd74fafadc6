import logging
from datetime import datetime, time

from halalgains.models import HydrationReminder

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Time to drink some water"


def parse_time(value):
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def reminders_for(user):
    return user.hydration_reminders.order_by(HydrationReminder.reminder_time).all()


def apply(reminder, data):
    for key, value in data.items():
        if key == "reminder_time":
            value = parse_time(value)
        setattr(reminder, key, value)
    return reminder


def due_reminders(now, ramadan_active):
    """Active reminders set for the current minute."""
    query = HydrationReminder.query.filter(
        HydrationReminder.is_active.is_(True),
        HydrationReminder.reminder_time == time(now.hour, now.minute),
    )
    if not ramadan_active:
        query = query.filter(HydrationReminder.ramadan_only.is_(False))
    return query.all()


def dispatch_due_reminders(app, now=None):
    """Scheduled job body: push every due reminder to its owner's room."""
    from halalgains.realtime import publish_to_user

    now = now or datetime.now()
    with app.app_context():
        reminders = due_reminders(now, app.config.get("RAMADAN_MODE", False))
        for reminder in reminders:
            publish_to_user(reminder.user_id, "hydration_reminder", {
                "id": reminder.id,
                "message": reminder.reminder_message or DEFAULT_MESSAGE,
                "reminder_time": reminder.reminder_time.strftime("%H:%M"),
            })
        if reminders:
            logger.info("Sent %d hydration reminders at %s", len(reminders), now.strftime("%H:%M"))
        return len(reminders)
