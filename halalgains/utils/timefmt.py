from datetime import datetime


def format_message_time(ts, now=None):
    """
    Short label for a chat timestamp: "14:05" today, "Yesterday",
    a weekday name within the last week, otherwise "Mar 4".
    """
    if ts is None:
        return ""
    now = now or datetime.utcnow()

    days = (now.date() - ts.date()).days
    if days <= 0:
        return ts.strftime("%H:%M")
    if days == 1:
        return "Yesterday"
    if days < 7:
        return ts.strftime("%a")
    return f"{ts.strftime('%b')} {ts.day}"
