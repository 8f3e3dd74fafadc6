from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from halalgains.extensions import db

USERS_TABLE = "users"


class User(db.Model):
    __tablename__ = USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.String(20),
        db.CheckConstraint("role IN ('client','coach')"),
        nullable=False,
        default="client",
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # One-to-One profiles
    coach_profile = db.relationship("CoachProfile", uselist=False, back_populates="user")
    client_profile = db.relationship(
        "ClientProfile", uselist=False, back_populates="user", foreign_keys="ClientProfile.user_id"
    )
    fitness_assessment = db.relationship("FitnessAssessment", uselist=False, back_populates="user")
    islamic_lifestyle = db.relationship("IslamicLifestyle", uselist=False, back_populates="user")
    allergies = db.relationship("UserAllergy", back_populates="user", cascade="all, delete-orphan")

    # Hydration
    hydration_reminders = db.relationship(
        "HydrationReminder", back_populates="user", lazy="dynamic", cascade="all, delete-orphan"
    )

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_coach(self):
        return self.role == "coach"

    @property
    def is_client(self):
        return self.role == "client"

    @property
    def display_name(self):
        if self.is_coach and self.coach_profile:
            return self.coach_profile.full_name
        if self.client_profile:
            return self.client_profile.full_name
        return self.email

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "name": self.display_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
