from datetime import datetime
from halalgains.extensions import db

WORKOUT_GOALS = ("weight_loss", "muscle_gain")
DIFFICULTIES = ("beginner", "intermediate", "advanced")
WORKOUT_TYPES = ("cardio", "strength", "boxing", "rest")
DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class WorkoutPlan(db.Model):
    __tablename__ = "workout_plans"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coach_profiles.id"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True, index=True)

    name = db.Column(db.String(150), nullable=False)
    duration = db.Column(db.String(50))
    goal = db.Column(
        db.String(20),
        db.CheckConstraint("goal IN ('weight_loss','muscle_gain')"),
        default="weight_loss",
    )
    difficulty = db.Column(
        db.String(20),
        db.CheckConstraint("difficulty IN ('beginner','intermediate','advanced')"),
        default="beginner",
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    coach = db.relationship("CoachProfile")
    client = db.relationship("User", foreign_keys=[client_id])
    weeks = db.relationship(
        "WorkoutWeek", back_populates="plan", cascade="all, delete-orphan",
        order_by="WorkoutWeek.week_number",
    )
    week_completions = db.relationship(
        "WorkoutWeekCompletion", back_populates="plan", cascade="all, delete-orphan", lazy="dynamic"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "coach_id": self.coach_id,
            "client_id": self.client_id,
            "name": self.name,
            "duration": self.duration,
            "goal": self.goal,
            "difficulty": self.difficulty,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class WorkoutWeek(db.Model):
    __tablename__ = "workout_weeks"

    id = db.Column(db.Integer, primary_key=True)
    workout_plan_id = db.Column(db.Integer, db.ForeignKey("workout_plans.id"), nullable=False, index=True)
    week_number = db.Column(db.Integer, nullable=False)

    plan = db.relationship("WorkoutPlan", back_populates="weeks")
    days = db.relationship(
        "WorkoutDay", back_populates="week", cascade="all, delete-orphan",
        order_by="WorkoutDay.day_of_week",
    )

    __table_args__ = (
        db.UniqueConstraint("workout_plan_id", "week_number", name="uq_workout_week_number"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "workout_plan_id": self.workout_plan_id,
            "week_number": self.week_number,
        }


class WorkoutDay(db.Model):
    __tablename__ = "workout_days"

    id = db.Column(db.Integer, primary_key=True)
    workout_week_id = db.Column(db.Integer, db.ForeignKey("workout_weeks.id"), nullable=False, index=True)
    day_of_week = db.Column(db.Integer, db.CheckConstraint("day_of_week BETWEEN 0 AND 6"), nullable=False)
    workout_type = db.Column(
        db.String(20),
        db.CheckConstraint("workout_type IN ('cardio','strength','boxing','rest')"),
        default="strength",
    )
    prayer_time_notes = db.Column(db.Text)

    week = db.relationship("WorkoutWeek", back_populates="days")
    exercises = db.relationship(
        "WorkoutExercise", back_populates="day", cascade="all, delete-orphan",
        order_by="WorkoutExercise.exercise_order",
    )
    completions = db.relationship(
        "WorkoutDayCompletion", back_populates="day", cascade="all, delete-orphan", lazy="dynamic"
    )

    __table_args__ = (
        db.UniqueConstraint("workout_week_id", "day_of_week", name="uq_workout_day_of_week"),
    )

    @property
    def day_name(self):
        return DAYS_OF_WEEK[self.day_of_week]

    def to_dict(self):
        return {
            "id": self.id,
            "workout_week_id": self.workout_week_id,
            "day_of_week": self.day_of_week,
            "day_name": self.day_name,
            "workout_type": self.workout_type,
            "prayer_time_notes": self.prayer_time_notes,
        }


class WorkoutExercise(db.Model):
    __tablename__ = "workout_exercises"

    id = db.Column(db.Integer, primary_key=True)
    workout_day_id = db.Column(db.Integer, db.ForeignKey("workout_days.id"), nullable=False, index=True)
    exercise_name = db.Column(db.String(150), nullable=False)
    sets = db.Column(db.Integer)
    reps = db.Column(db.Integer)
    rest_period_seconds = db.Column(db.Integer)
    notes = db.Column(db.Text)
    exercise_order = db.Column(db.Integer, nullable=False, default=0)

    day = db.relationship("WorkoutDay", back_populates="exercises")
    completions = db.relationship(
        "ExerciseCompletion", back_populates="exercise", cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "workout_day_id": self.workout_day_id,
            "exercise_name": self.exercise_name,
            "sets": self.sets,
            "reps": self.reps,
            "rest_period_seconds": self.rest_period_seconds,
            "notes": self.notes,
            "exercise_order": self.exercise_order,
        }
