# scream_backend/utils/__init__.py
"""
Helpers used across the project: timestamps and request field validation.
"""

from .datetime_utils import DateTimeUtils, now, for_firestore, from_firestore
from .validators import is_empty, is_email, reduce_user_details

__all__ = [
    'DateTimeUtils',
    'now', 'for_firestore', 'from_firestore',
    'is_empty', 'is_email', 'reduce_user_details'
]
