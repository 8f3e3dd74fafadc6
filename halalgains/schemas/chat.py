from marshmallow import fields, validate, EXCLUDE, pre_load

from halalgains.extensions import ma


class StartConversationSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    coach_id = fields.Integer(required=True)


class SendMessageSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(required=True, validate=validate.Length(min=1, max=5000))

    @pre_load
    def strip_content(self, data, **kwargs):
        data = dict(data)
        if isinstance(data.get("content"), str):
            data["content"] = data["content"].strip()
        return data
