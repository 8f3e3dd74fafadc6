from datetime import datetime
from halalgains.extensions import db


class Conversation(db.Model):
    __tablename__ = "conversations"

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coach_profiles.id"), nullable=False, index=True)

    # Soft delete, per participant
    deleted_by_client = db.Column(db.Boolean, default=False, nullable=False)
    deleted_by_coach = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    client = db.relationship("User", foreign_keys=[client_id])
    coach = db.relationship("CoachProfile", foreign_keys=[coach_id])
    messages = db.relationship(
        "Message", back_populates="conversation", cascade="all, delete-orphan",
        order_by="Message.created_at", lazy="dynamic",
    )

    __table_args__ = (
        db.UniqueConstraint("client_id", "coach_id", name="uq_conversation_client_coach"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "client_id": self.client_id,
            "coach_id": self.coach_id,
            "deleted_by_client": self.deleted_by_client,
            "deleted_by_coach": self.deleted_by_coach,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
