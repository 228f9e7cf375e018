# scream_backend/api/notifications/schemas.py
from marshmallow import fields, validate

# POST /api/notifications takes a bare JSON array of notification ids
notification_ids_field = fields.List(
    fields.Str(validate=validate.Length(min=1)),
    required=True,
    validate=validate.Length(min=1, error="At least one notification id is required.")
)
