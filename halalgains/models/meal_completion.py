from datetime import datetime
from halalgains.extensions import db


class MealPlanDayCompletion(db.Model):
    __tablename__ = "meal_plan_day_completions"

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_day_id = db.Column(db.Integer, db.ForeignKey("meal_plan_days.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow)
    notes = db.Column(db.Text)

    day = db.relationship("MealPlanDay", back_populates="completions")

    __table_args__ = (
        db.UniqueConstraint("meal_plan_day_id", "user_id", name="uq_meal_day_completion_user"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "meal_plan_day_id": self.meal_plan_day_id,
            "user_id": self.user_id,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "notes": self.notes,
        }


class MealPlanWeekCompletion(db.Model):
    __tablename__ = "meal_plan_week_completions"

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey("meal_plans.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    week_number = db.Column(db.Integer, nullable=False)
    weight_kg = db.Column(db.Float)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow)

    plan = db.relationship("MealPlan", back_populates="week_completions")

    __table_args__ = (
        db.UniqueConstraint("meal_plan_id", "user_id", "week_number", name="uq_meal_week_completion"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "meal_plan_id": self.meal_plan_id,
            "user_id": self.user_id,
            "week_number": self.week_number,
            "weight_kg": self.weight_kg,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
