# scream_backend/api/screams/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from scream_backend.utils.validators import not_blank

# --- requests ---

class ScreamCreateSchema(Schema):
    """POST /api/screams"""
    body = fields.Str(required=True, validate=[not_blank, validate.Length(max=1000)])


class CommentCreateSchema(Schema):
    """POST /api/screams/{screamId}/comment"""
    body = fields.Str(required=True, validate=[not_blank, validate.Length(max=1000)])


class ScreamListQuerySchema(Schema):
    """Query string of GET /api/screams"""
    class Meta:
        unknown = EXCLUDE

    limit = fields.Int(load_default=None, validate=validate.Range(min=1, max=100))
    cursor = fields.Str(load_default=None)

# --- responses (camelCase for the web client) ---

class CommentResponseSchema(Schema):
    comment_id = fields.Str(data_key="commentId")
    scream_id = fields.Str(data_key="screamId", required=True)
    body = fields.Str(required=True)
    user_handle = fields.Str(data_key="userHandle", required=True)
    user_image = fields.Str(data_key="userImage", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", required=True)


class ScreamResponseSchema(Schema):
    scream_id = fields.Str(data_key="screamId", required=True)
    body = fields.Str(required=True)
    user_handle = fields.Str(data_key="userHandle", required=True)
    user_image = fields.Str(data_key="userImage", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", required=True)
    like_count = fields.Int(data_key="likeCount", dump_default=0)
    comment_count = fields.Int(data_key="commentCount", dump_default=0)


class ScreamDetailResponseSchema(ScreamResponseSchema):
    """GET /api/screams/{screamId}: the scream plus its comments."""
    comments = fields.List(fields.Nested(CommentResponseSchema), dump_default=list)
