# scream_backend/api/auth/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from scream_backend.utils.validators import not_blank, valid_email


class SignupSchema(Schema):
    """POST /api/signup"""
    email = fields.Str(required=True, validate=valid_email)
    password = fields.Str(required=True, validate=[
        not_blank, validate.Length(min=6, error="Password must be at least 6 characters long")
    ])
    confirm_password = fields.Str(data_key="confirmPassword", required=True)
    handle = fields.Str(required=True, validate=not_blank)

    @validates_schema(skip_on_field_errors=False)
    def validate_passwords_match(self, data, **kwargs):
        if data.get('password') != data.get('confirm_password'):
            raise ValidationError("Passwords must match", field_name="confirmPassword")


class LoginSchema(Schema):
    """POST /api/login"""
    email = fields.Str(required=True, validate=not_blank)
    password = fields.Str(required=True, validate=not_blank)
