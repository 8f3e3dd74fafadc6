from datetime import datetime
from halalgains.extensions import db


class HydrationReminder(db.Model):
    __tablename__ = "hydration_reminders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    reminder_time = db.Column(db.Time, nullable=False)
    reminder_message = db.Column(db.String(255))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    ramadan_only = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="hydration_reminders")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "reminder_time": self.reminder_time.strftime("%H:%M"),
            "reminder_message": self.reminder_message,
            "is_active": self.is_active,
            "ramadan_only": self.ramadan_only,
        }
