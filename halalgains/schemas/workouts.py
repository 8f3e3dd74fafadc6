from marshmallow import fields, validate, EXCLUDE

from halalgains.extensions import ma
from halalgains.models.workout_plan import WORKOUT_GOALS, DIFFICULTIES, WORKOUT_TYPES


class WorkoutPlanSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    duration = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=50))
    goal = fields.String(load_default="weight_loss", validate=validate.OneOf(WORKOUT_GOALS))
    difficulty = fields.String(load_default="beginner", validate=validate.OneOf(DIFFICULTIES))
    client_id = fields.Integer(load_default=None, allow_none=True)


class WorkoutWeekSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    week_number = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))


class WorkoutDaySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    day_of_week = fields.Integer(required=True, validate=validate.Range(min=0, max=6))
    workout_type = fields.String(load_default="strength", validate=validate.OneOf(WORKOUT_TYPES))
    prayer_time_notes = fields.String(load_default=None, allow_none=True)


class WorkoutExerciseSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    exercise_name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    sets = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))
    reps = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))
    rest_period_seconds = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    notes = fields.String(load_default=None, allow_none=True)


class ExerciseLogSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    workout_exercise_id = fields.Integer(required=True)
    completed = fields.Boolean(load_default=False)
    actual_sets = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    actual_reps = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    weight_used_kg = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    notes = fields.String(load_default=None, allow_none=True)


class WorkoutLogSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    notes = fields.String(load_default=None, allow_none=True)
    rating = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1, max=5))
    exercises = fields.List(fields.Nested(ExerciseLogSchema), load_default=list)
