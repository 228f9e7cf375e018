# scream_backend/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from scream_backend.utils.datetime_utils import now


@dataclass
class User:
    """
    Document in the 'users' collection. The document id is the handle.
    """
    user_id: str           # Firebase Auth uid
    handle: str
    email: str
    image_url: str
    created_at: datetime = field(default_factory=now)
    bio: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
