from datetime import datetime
from halalgains.extensions import db


class WeightTracking(db.Model):
    __tablename__ = "weight_tracking"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey("meal_plans.id"), nullable=False, index=True)
    week_number = db.Column(db.Integer, nullable=False)
    weight_kg = db.Column(db.Float, nullable=False)
    recorded_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    plan = db.relationship("MealPlan", back_populates="weights")

    __table_args__ = (
        db.UniqueConstraint("user_id", "meal_plan_id", "week_number", name="uq_weight_tracking_week"),
        db.CheckConstraint("weight_kg > 0", name="check_weight_positive"),
    )

    def to_dict(self):
        return {
            "week_number": self.week_number,
            "weight_kg": self.weight_kg,
            "recorded_at": self.recorded_at.isoformat() if self.recorded_at else None,
        }
