# scream_backend/models/scream.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from scream_backend.utils.datetime_utils import now


@dataclass
class Scream:
    """
    Document in the 'screams' collection.
    like_count / comment_count are denormalised counters over 'likes' and 'comments'.
    """
    body: str
    user_handle: str
    user_image: Optional[str] = None
    created_at: datetime = field(default_factory=now)
    like_count: int = 0
    comment_count: int = 0
