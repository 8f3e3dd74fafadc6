from datetime import datetime
from halalgains.extensions import db


class WorkoutDayCompletion(db.Model):
    __tablename__ = "workout_day_completions"

    id = db.Column(db.Integer, primary_key=True)
    workout_day_id = db.Column(db.Integer, db.ForeignKey("workout_days.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow)
    notes = db.Column(db.Text)
    rating = db.Column(db.Integer, db.CheckConstraint("rating IS NULL OR rating BETWEEN 1 AND 5"))
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    day = db.relationship("WorkoutDay", back_populates="completions")
    exercise_completions = db.relationship(
        "ExerciseCompletion", back_populates="day_completion", cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("workout_day_id", "user_id", name="uq_workout_day_completion_user"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "workout_day_id": self.workout_day_id,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "notes": self.notes,
            "rating": self.rating,
            "exercise_completions": [ec.to_dict() for ec in self.exercise_completions],
        }


class ExerciseCompletion(db.Model):
    __tablename__ = "exercise_completions"

    id = db.Column(db.Integer, primary_key=True)
    workout_day_completion_id = db.Column(
        db.Integer, db.ForeignKey("workout_day_completions.id"), nullable=False, index=True
    )
    workout_exercise_id = db.Column(db.Integer, db.ForeignKey("workout_exercises.id"), nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    actual_sets = db.Column(db.Integer)
    actual_reps = db.Column(db.Integer)
    weight_used_kg = db.Column(db.Float)
    notes = db.Column(db.Text)

    day_completion = db.relationship("WorkoutDayCompletion", back_populates="exercise_completions")
    exercise = db.relationship("WorkoutExercise", back_populates="completions")

    __table_args__ = (
        db.UniqueConstraint(
            "workout_day_completion_id", "workout_exercise_id", name="uq_exercise_completion"
        ),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "workout_exercise_id": self.workout_exercise_id,
            "completed": self.completed,
            "actual_sets": self.actual_sets,
            "actual_reps": self.actual_reps,
            "weight_used_kg": self.weight_used_kg,
            "notes": self.notes,
        }


class WorkoutWeekCompletion(db.Model):
    __tablename__ = "workout_week_completions"

    id = db.Column(db.Integer, primary_key=True)
    workout_plan_id = db.Column(db.Integer, db.ForeignKey("workout_plans.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    week_number = db.Column(db.Integer, nullable=False)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow)

    plan = db.relationship("WorkoutPlan", back_populates="week_completions")

    __table_args__ = (
        db.UniqueConstraint(
            "workout_plan_id", "user_id", "week_number", name="uq_workout_week_completion"
        ),
    )
