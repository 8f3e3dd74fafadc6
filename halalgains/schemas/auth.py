from marshmallow import fields, validate, validates_schema, ValidationError, EXCLUDE, pre_load

from halalgains.extensions import ma
from halalgains.models.client_profile import GENDERS, FITNESS_GOALS, FITNESS_LEVELS
from halalgains.models.islamic_lifestyle import (
    FASTING_HABITS, WORKOUT_PRAYER_PREFERENCES, DIETARY_RESTRICTIONS, COACH_GENDER_PREFERENCES
)


class SignUpSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    # Account
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6))

    # Personal
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    age = fields.Integer(required=True, validate=validate.Range(min=13, max=100))
    gender = fields.String(required=True, validate=validate.OneOf(GENDERS))
    location = fields.String(required=True, validate=validate.Length(min=1, max=150))

    # Fitness goals
    fitness_goal = fields.String(load_default="lose_weight", validate=validate.OneOf(FITNESS_GOALS))
    fitness_level = fields.String(load_default="healthy", validate=validate.OneOf(FITNESS_LEVELS))

    # Fitness assessment (metric unless use_imperial is set)
    use_imperial = fields.Boolean(load_default=False)
    current_weight = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    target_weight = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    height = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0, min_inclusive=False))
    height_feet = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    height_inches = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0, max=11))
    injuries_limitations = fields.String(load_default=None, allow_none=True)
    medical_conditions = fields.String(load_default=None, allow_none=True)
    post_pregnancy = fields.Boolean(load_default=False)

    # Islamic lifestyle
    fasting_habit = fields.String(load_default="ramadan_only", validate=validate.OneOf(FASTING_HABITS))
    workout_prayer_preference = fields.String(
        load_default="no_preference", validate=validate.OneOf(WORKOUT_PRAYER_PREFERENCES)
    )
    dietary_restriction = fields.String(load_default="none", validate=validate.OneOf(DIETARY_RESTRICTIONS))
    coach_gender_preference = fields.String(
        load_default="no_preference", validate=validate.OneOf(COACH_GENDER_PREFERENCES)
    )
    allergies = fields.List(fields.String(validate=validate.Length(min=1, max=100)), load_default=list)

    @pre_load
    def normalize(self, data, **kwargs):
        data = dict(data)
        if isinstance(data.get("email"), str):
            data["email"] = data["email"].strip().lower()
        if isinstance(data.get("full_name"), str):
            data["full_name"] = data["full_name"].strip()
        return data

    @validates_schema
    def check_height(self, data, **kwargs):
        if data.get("use_imperial"):
            if not data.get("height_feet") and not data.get("height_inches"):
                raise ValidationError("Height in feet/inches is required", "height_feet")
        elif not data.get("height"):
            raise ValidationError("Height is required", "height")


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)
