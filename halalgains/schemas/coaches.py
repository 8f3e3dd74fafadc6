from marshmallow import fields, validate, EXCLUDE

from halalgains.extensions import ma
from halalgains.models.client_profile import GENDERS
from halalgains.models.coach_profile import SPECIALISATIONS, AVAILABILITY_TYPES


class CoachFilterSchema(ma.Schema):
    """Query-string filters for the coach directory."""

    class Meta:
        unknown = EXCLUDE

    search = fields.String(load_default="")
    gender = fields.String(load_default="", validate=validate.OneOf(("",) + GENDERS))
    location = fields.String(load_default="")
    specialisation = fields.String(
        load_default="", validate=validate.OneOf([""] + list(SPECIALISATIONS))
    )
    min_price = fields.Float(load_default=0, validate=validate.Range(min=0))
    max_price = fields.Float(load_default=500, validate=validate.Range(min=0))
    availability_type = fields.String(
        load_default="", validate=validate.OneOf(("",) + AVAILABILITY_TYPES)
    )
    min_rating = fields.Float(load_default=0, validate=validate.Range(min=0, max=5))


class CoachProfileUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(validate=validate.Length(min=1, max=150))
    age = fields.Integer(allow_none=True, validate=validate.Range(min=16, max=100))
    gender = fields.String(allow_none=True, validate=validate.OneOf(GENDERS))
    location = fields.String(allow_none=True)
    certifications = fields.List(fields.String())
    years_of_experience = fields.Integer(allow_none=True, validate=validate.Range(min=0))
    specialisations = fields.List(fields.String(validate=validate.OneOf(list(SPECIALISATIONS))))
    bio = fields.String(allow_none=True)
    training_philosophy = fields.String(allow_none=True)
    success_stories = fields.String(allow_none=True)
    hourly_rate = fields.Float(allow_none=True, validate=validate.Range(min=0))
    package_price = fields.Float(allow_none=True, validate=validate.Range(min=0))
    availability_type = fields.String(allow_none=True, validate=validate.OneOf(AVAILABILITY_TYPES))
    languages_spoken = fields.List(fields.String(validate=validate.Length(min=2, max=5)))


class ReviewSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    rating = fields.Integer(required=True, validate=validate.Range(min=1, max=5))
    review_text = fields.String(load_default=None, allow_none=True)


class AssignCoachSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    client_user_id = fields.Integer(required=True)
