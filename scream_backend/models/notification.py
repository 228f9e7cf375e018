# scream_backend/models/notification.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from scream_backend.utils.datetime_utils import now


class NotificationType(Enum):
    LIKE = "like"
    COMMENT = "comment"


@dataclass
class Notification:
    """
    Document in the 'notifications' collection.
    Its id is the id of the like or comment that produced it.
    """
    recipient: str    # handle of the scream author
    sender: str       # handle of the user who liked / commented
    scream_id: str
    type: NotificationType
    read: bool = False
    created_at: datetime = field(default_factory=now)
