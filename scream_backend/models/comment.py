# scream_backend/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from scream_backend.utils.datetime_utils import now


@dataclass
class Comment:
    """Document in the 'comments' collection."""
    scream_id: str
    body: str
    user_handle: str
    user_image: Optional[str] = None
    created_at: datetime = field(default_factory=now)
