from marshmallow import Schema, fields, post_load, validate

MAX_CHIRP_LENGTH = 140
PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_body(body: str, banned=PROFANE_WORDS) -> str:
    """Mask banned words; only whole space-separated words match, case-insensitively."""
    words = body.split(" ")
    return " ".join(MASK if word.lower() in banned else word for word in words)


class ChirpCreateSchema(Schema):
    body = fields.String(
        required=True,
        validate=validate.Length(max=MAX_CHIRP_LENGTH, error="Chirp is too long"),
    )

    @post_load
    def clean(self, data, **kwargs):
        data["body"] = clean_body(data["body"])
        return data


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()
