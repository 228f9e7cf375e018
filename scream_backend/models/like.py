# scream_backend/models/like.py
from dataclasses import dataclass, field
from datetime import datetime

from scream_backend.utils.datetime_utils import now


def like_id_for(user_handle: str, scream_id: str) -> str:
    """A user can like a scream once, so the pair is the document id."""
    return f"{user_handle}_{scream_id}"


@dataclass
class Like:
    """Document in the 'likes' collection."""
    user_handle: str
    scream_id: str
    created_at: datetime = field(default_factory=now)
