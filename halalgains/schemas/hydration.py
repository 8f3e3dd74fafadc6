from marshmallow import fields, validate, EXCLUDE

from halalgains.extensions import ma
from halalgains.schemas.meals import TIME_HHMM


class HydrationReminderSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    reminder_time = fields.String(required=True, validate=TIME_HHMM)
    reminder_message = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=255))
    is_active = fields.Boolean(load_default=True)
    ramadan_only = fields.Boolean(load_default=True)
