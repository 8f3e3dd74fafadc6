from marshmallow import fields, validate, EXCLUDE

from halalgains.extensions import ma
from halalgains.models.meal_plan import MEAL_TYPE_VALUES

TIME_HHMM = validate.Regexp(r"^([01]\d|2[0-3]):[0-5]\d$", error="Time must be HH:MM")


class MealPlanSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    description = fields.String(load_default=None, allow_none=True)
    calories_target = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    protein_target_g = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    carbs_target_g = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    fats_target_g = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    ramadan_mode = fields.Boolean(load_default=False)
    client_id = fields.Integer(load_default=None, allow_none=True)


class MealPlanDaySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    day_number = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))
    day_name = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=50))
    notes = fields.String(load_default=None, allow_none=True)


class FoodSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    food_name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    serving_size = fields.String(load_default=None, allow_none=True)
    quantity = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    calories = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    protein_g = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    carbs_g = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    fats_g = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0))
    is_halal = fields.Boolean(load_default=True)
    notes = fields.String(load_default=None, allow_none=True)


class MealSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    meal_type = fields.String(load_default="breakfast", validate=validate.OneOf(MEAL_TYPE_VALUES))
    meal_name = fields.String(load_default=None, allow_none=True)
    description = fields.String(load_default=None, allow_none=True)
    total_calories = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))
    meal_time = fields.String(load_default=None, allow_none=True, validate=TIME_HHMM)
    notes = fields.String(load_default=None, allow_none=True)


class MealWithFoodsSchema(MealSchema):
    foods = fields.List(fields.Nested(FoodSchema), load_default=list)


class BulkDaySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    day_number = fields.Integer(required=True, validate=validate.Range(min=1))
    day_name = fields.String(load_default=None, allow_none=True)
    meals = fields.List(fields.Nested(MealWithFoodsSchema), required=True, validate=validate.Length(min=1))


class CompleteWeekSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    weight_kg = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
