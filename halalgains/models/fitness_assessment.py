from datetime import datetime
from halalgains.extensions import db


class FitnessAssessment(db.Model):
    __tablename__ = "fitness_assessments"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    current_weight_kg = db.Column(db.Float, nullable=False)
    target_weight_kg = db.Column(db.Float, nullable=False)
    height_cm = db.Column(db.Float, nullable=False)
    injuries_limitations = db.Column(db.Text)
    medical_conditions = db.Column(db.Text)
    post_pregnancy = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship("User", back_populates="fitness_assessment")

    def to_dict(self):
        return {
            "current_weight_kg": self.current_weight_kg,
            "target_weight_kg": self.target_weight_kg,
            "height_cm": self.height_cm,
            "injuries_limitations": self.injuries_limitations,
            "medical_conditions": self.medical_conditions,
            "post_pregnancy": self.post_pregnancy,
        }
