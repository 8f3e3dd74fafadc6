from datetime import datetime
from halalgains.extensions import db

GENDERS = ("male", "female")
FITNESS_GOALS = ("lose_weight", "build_muscle")
FITNESS_LEVELS = ("unfit", "healthy", "athlete")


class ClientProfile(db.Model):
    __tablename__ = "client_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    coach_id = db.Column(
        db.Integer, db.ForeignKey("coach_profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )

    full_name = db.Column(db.String(150), nullable=False)
    age = db.Column(db.Integer)
    location = db.Column(db.String(150))
    gender = db.Column(db.String(10), db.CheckConstraint("gender IN ('male','female')"))
    weight_kg = db.Column(db.Float)
    fitness_level = db.Column(db.String(20), default="healthy")
    fitness_goal = db.Column(db.String(20), default="lose_weight")
    post_pregnancy_recovery = db.Column(db.Boolean, default=False)
    profile_photo = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="client_profile", foreign_keys=[user_id])
    coach = db.relationship("CoachProfile", back_populates="clients")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "coach_id": self.coach_id,
            "full_name": self.full_name,
            "age": self.age,
            "location": self.location,
            "gender": self.gender,
            "weight_kg": self.weight_kg,
            "fitness_level": self.fitness_level,
            "fitness_goal": self.fitness_goal,
            "post_pregnancy_recovery": self.post_pregnancy_recovery,
            "profile_photo": self.profile_photo,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
