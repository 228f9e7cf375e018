# scream_backend/services/notification_service.py
import logging
from dataclasses import asdict
from firebase_admin import firestore
from typing import Any, Dict, List, Optional

from scream_backend.models.notification import Notification, NotificationType
from scream_backend.utils.datetime_utils import for_firestore, from_firestore
from scream_backend.utils.firestore_utils import commit_in_batches


class NotificationService:
    """
    Reads and writes the 'notifications' collection.
    """
    def __init__(self):
        self.db = firestore.client()
        self.notifications_ref = self.db.collection('notifications')

    def create_notification(self, notification_id: str, recipient: str, sender: str,
                            n_type: NotificationType, scream_id: str) -> Optional[Dict[str, Any]]:
        """
        Stores a notification under the id of the like/comment that caused it.
        Nothing is stored when a user acts on their own scream.

        :param notification_id: id of the like or comment document
        :param recipient: handle of the scream author
        :param sender: handle of the acting user
        :param n_type: NotificationType
        :param scream_id: scream the action refers to
        """
        if recipient == sender:
            return None

        notification = Notification(
            recipient=recipient,
            sender=sender,
            scream_id=scream_id,
            type=n_type
        )
        notification_dict = for_firestore(asdict(notification))
        self.notifications_ref.document(notification_id).set(notification_dict)
        logging.info(f"{n_type.value} notification created: {sender} -> {recipient}")
        return notification_dict

    def delete_notification(self, notification_id: str) -> None:
        self.notifications_ref.document(notification_id).delete()

    def get_notifications_for(self, handle: str) -> List[Dict[str, Any]]:
        """Notifications addressed to `handle`, newest first, each with its notification_id."""
        docs = (self.notifications_ref
                .where('recipient', '==', handle)
                .order_by('created_at', direction=firestore.Query.DESCENDING)
                .stream())
        return [{**from_firestore(doc.to_dict()), 'notification_id': doc.id} for doc in docs]

    def mark_read(self, handle: str, notification_ids: List[str]) -> int:
        """
        Flags the given notifications as read.
        Ids that do not exist or belong to another user are skipped.

        :return: number of notifications updated
        """
        refs = []
        for notification_id in set(notification_ids):
            ref = self.notifications_ref.document(notification_id)
            doc = ref.get()
            if not doc.exists or doc.to_dict().get('recipient') != handle:
                logging.warning(f"Skipping notification {notification_id} for {handle}")
                continue
            refs.append(ref)

        return commit_in_batches(self.db, refs, lambda batch, ref: batch.update(ref, {'read': True}))
