# scream_backend/api/users/schemas.py
from marshmallow import Schema, fields, post_load, EXCLUDE

from scream_backend.api.screams.schemas import ScreamResponseSchema
from scream_backend.utils.validators import reduce_user_details


class UserDetailsSchema(Schema):
    """
    POST /api/user
    Blank values are dropped on load; a bare website gets an http:// scheme.
    """
    class Meta:
        unknown = EXCLUDE

    bio = fields.Str(load_default="")
    website = fields.Str(load_default="")
    location = fields.Str(load_default="")

    @post_load
    def reduce(self, data, **kwargs):
        return reduce_user_details(data)


class UserCredentialsSchema(Schema):
    """The user document as returned to its owner."""
    user_id = fields.Str(data_key="userId")
    handle = fields.Str(required=True)
    email = fields.Email(required=True)
    created_at = fields.DateTime(data_key="createdAt")
    image_url = fields.Str(data_key="imageUrl", allow_none=True)
    bio = fields.Str(allow_none=True)
    website = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True)


class UserPublicSchema(Schema):
    """
    The user document as shown to everyone else.
    email and the Firebase uid are left out.
    """
    handle = fields.Str(required=True)
    created_at = fields.DateTime(data_key="createdAt")
    image_url = fields.Str(data_key="imageUrl", allow_none=True)
    bio = fields.Str(allow_none=True)
    website = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True)


class LikeResponseSchema(Schema):
    user_handle = fields.Str(data_key="userHandle", required=True)
    scream_id = fields.Str(data_key="screamId", required=True)
    created_at = fields.DateTime(data_key="createdAt")


class NotificationResponseSchema(Schema):
    notification_id = fields.Str(data_key="notificationId", required=True)
    recipient = fields.Str(required=True)
    sender = fields.Str(required=True)
    scream_id = fields.Str(data_key="screamId", required=True)
    type = fields.Str(required=True)
    read = fields.Bool(required=True)
    created_at = fields.DateTime(data_key="createdAt")


class AuthenticatedUserResponseSchema(Schema):
    """GET /api/user"""
    credentials = fields.Nested(UserCredentialsSchema, allow_none=True)
    likes = fields.List(fields.Nested(LikeResponseSchema))
    notifications = fields.List(fields.Nested(NotificationResponseSchema))


class UserDetailsResponseSchema(Schema):
    """GET /api/user/{handle}"""
    user = fields.Nested(UserPublicSchema, required=True)
    screams = fields.List(fields.Nested(ScreamResponseSchema))
