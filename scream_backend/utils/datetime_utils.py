# scream_backend/utils/datetime_utils.py
"""
Single place for timestamp handling.

- Every timestamp the backend writes is timezone-aware UTC.
- Firestore hands back DatetimeWithNanoseconds; from_firestore normalises it.
- Responses serialise timestamps through marshmallow fields.DateTime (ISO 8601, +00:00).
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """Timestamp helpers shared by models, services and schemas."""

    @staticmethod
    def now() -> datetime:
        """Current time as a UTC timezone-aware datetime."""
        return datetime.now(timezone.utc)

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Prepare a document for writing.

        - naive datetime -> UTC datetime
        - aware datetime -> converted to UTC
        - Enum members -> their value
        - dict / list are converted recursively
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        elif isinstance(obj, Enum):
            return obj.value
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Normalise a document read from Firestore: every datetime becomes UTC-aware.
        Conversion problems are logged and the original value is returned.
        """
        try:
            if isinstance(obj, datetime):
                if obj.tzinfo is None:
                    return obj.replace(tzinfo=timezone.utc)
                return obj.astimezone(timezone.utc)
            elif isinstance(obj, dict):
                return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [DateTimeUtils.from_firestore(item) for item in obj]
            return obj
        except Exception as e:
            logger.error(f"Firestore read conversion failed: {obj} ({type(obj)}) - {e}")
            return obj


def now() -> datetime:
    return DateTimeUtils.now()

def for_firestore(obj: Any) -> Any:
    return DateTimeUtils.for_firestore(obj)

def from_firestore(obj: Any) -> Any:
    return DateTimeUtils.from_firestore(obj)
