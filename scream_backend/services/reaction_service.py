# scream_backend/services/reaction_service.py
"""
Follow-up writes that keep denormalised data consistent after a primary write:
notifications for likes and comments, user image propagation, and the
cascade that runs when a scream is deleted.

Services call these right after their own write has committed. A failing
reaction is logged and reported as False; it never fails the request.
"""
import logging
from typing import Any, Dict

from firebase_admin import firestore

from scream_backend.models.notification import NotificationType
from scream_backend.services.notification_service import NotificationService
from scream_backend.utils.firestore_utils import commit_in_batches


class ReactionService:
    def __init__(self, notification_service: NotificationService):
        self.db = firestore.client()
        self.screams_ref = self.db.collection('screams')
        self.comments_ref = self.db.collection('comments')
        self.likes_ref = self.db.collection('likes')
        self.notifications_ref = self.db.collection('notifications')
        self.notification_service = notification_service

    def _notify_scream_author(self, source_id: str, source: Dict[str, Any], n_type: NotificationType) -> bool:
        scream_doc = self.screams_ref.document(source['scream_id']).get()
        if not scream_doc.exists:
            return False
        author = scream_doc.to_dict().get('user_handle')
        if author == source['user_handle']:
            return False
        self.notification_service.create_notification(
            notification_id=source_id,
            recipient=author,
            sender=source['user_handle'],
            n_type=n_type,
            scream_id=scream_doc.id
        )
        return True

    def on_like_created(self, like_id: str, like: Dict[str, Any]) -> bool:
        """Notify the scream author about a new like."""
        try:
            return self._notify_scream_author(like_id, like, NotificationType.LIKE)
        except Exception as e:
            logging.error(f"Like notification failed (like_id: {like_id}): {e}", exc_info=True)
            return False

    def on_like_deleted(self, like_id: str) -> bool:
        """Remove the notification created for the like."""
        try:
            self.notification_service.delete_notification(like_id)
            return True
        except Exception as e:
            logging.error(f"Like notification removal failed (like_id: {like_id}): {e}", exc_info=True)
            return False

    def on_comment_created(self, comment_id: str, comment: Dict[str, Any]) -> bool:
        """Notify the scream author about a new comment."""
        try:
            return self._notify_scream_author(comment_id, comment, NotificationType.COMMENT)
        except Exception as e:
            logging.error(f"Comment notification failed (comment_id: {comment_id}): {e}", exc_info=True)
            return False

    def on_user_image_changed(self, before: Dict[str, Any], after: Dict[str, Any]) -> bool:
        """Copy a new profile image onto every scream and comment of the user."""
        if before.get('image_url') == after.get('image_url'):
            return False
        handle = before['handle']
        new_image = after.get('image_url')
        try:
            refs = [doc.reference for doc in self.screams_ref.where('user_handle', '==', handle).stream()]
            refs += [doc.reference for doc in self.comments_ref.where('user_handle', '==', handle).stream()]
            commit_in_batches(self.db, refs, lambda batch, ref: batch.update(ref, {'user_image': new_image}))
            logging.info(f"Profile image propagated to {len(refs)} documents of {handle}")
            return True
        except Exception as e:
            logging.error(f"Profile image propagation failed (handle: {handle}): {e}", exc_info=True)
            return False

    def on_scream_deleted(self, scream_id: str) -> bool:
        """Delete the comments, likes and notifications of a removed scream."""
        try:
            refs = []
            for collection in (self.comments_ref, self.likes_ref, self.notifications_ref):
                refs += [doc.reference for doc in collection.where('scream_id', '==', scream_id).stream()]
            commit_in_batches(self.db, refs, lambda batch, ref: batch.delete(ref))
            logging.info(f"Scream {scream_id} cascade removed {len(refs)} documents")
            return True
        except Exception as e:
            logging.error(f"Scream cascade failed (scream_id: {scream_id}): {e}", exc_info=True)
            return False
