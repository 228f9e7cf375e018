# scream_backend/utils/validators.py
"""
Field validators shared by the request schemas.
"""

import re
from typing import Any, Dict, Optional

from marshmallow import ValidationError

EMPTY_MESSAGE = "Must not be empty"
INVALID_EMAIL_MESSAGE = "Must be a valid email address"

EMAIL_REGEX = re.compile(
    r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))@'
    r'((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$'
)


def is_empty(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_email(value: Optional[str]) -> bool:
    return bool(value) and EMAIL_REGEX.match(value) is not None


def not_blank(value: str) -> None:
    """marshmallow validator: rejects whitespace-only strings."""
    if is_empty(value):
        raise ValidationError(EMPTY_MESSAGE)


def valid_email(value: str) -> None:
    """marshmallow validator: empty check first, then the e-mail pattern."""
    not_blank(value)
    if not is_email(value):
        raise ValidationError(INVALID_EMAIL_MESSAGE)


def reduce_user_details(data: Dict[str, Any]) -> Dict[str, str]:
    """
    Keep only the profile fields that carry a value.
    A website without a scheme gets 'http://' prepended.
    """
    user_details = {}

    if not is_empty(data.get('bio')):
        user_details['bio'] = data['bio']

    website = (data.get('website') or '').strip()
    if website:
        if website[:4] != 'http':
            user_details['website'] = f"http://{website}"
        else:
            user_details['website'] = website

    if not is_empty(data.get('location')):
        user_details['location'] = data['location'].strip()

    return user_details
