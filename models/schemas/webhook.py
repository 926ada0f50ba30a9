from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED = "user.upgraded"


class PolkaDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class PolkaWebhookSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(PolkaDataSchema, required=False)
