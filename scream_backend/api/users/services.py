# scream_backend/api/users/services.py
import logging
from typing import IO, Any, Dict, Optional

from firebase_admin import firestore

from scream_backend.api.screams.services import ScreamService
from scream_backend.services.notification_service import NotificationService
from scream_backend.services.reaction_service import ReactionService
from scream_backend.services.storage_service import StorageService
from scream_backend.utils.datetime_utils import from_firestore


class UserService:
    """
    User profile logic. The 'users' collection is keyed by handle.
    Shared services are injected by create_app().
    """
    def __init__(self, storage_service: StorageService, scream_service: ScreamService,
                 notification_service: NotificationService, reaction_service: ReactionService):
        self.db = firestore.client()
        self.users_ref = self.db.collection('users')
        self.likes_ref = self.db.collection('likes')
        self.storage_service = storage_service
        self.scream_service = scream_service
        self.notification_service = notification_service
        self.reactions = reaction_service

    def get_user(self, handle: str) -> Optional[Dict[str, Any]]:
        doc = self.users_ref.document(handle).get()
        return from_firestore(doc.to_dict()) if doc.exists else None

    def get_user_by_uid(self, uid: str) -> Optional[Dict[str, Any]]:
        """Looks up the user document that belongs to a Firebase Auth uid."""
        user_doc = next(self.users_ref.where('user_id', '==', uid).limit(1).stream(), None)
        return from_firestore(user_doc.to_dict()) if user_doc else None

    def update_user_details(self, handle: str, details: Dict[str, str]) -> None:
        if not details:
            return
        try:
            self.users_ref.document(handle).update(details)
            logging.info(f"Details updated for {handle}: {sorted(details)}")
        except Exception as e:
            logging.error(f"User details update failed (handle: {handle}): {e}", exc_info=True)
            raise

    def get_authenticated_user(self, handle: str) -> Dict[str, Any]:
        """The caller's own document, the likes they gave and the notifications they received."""
        like_docs = self.likes_ref.where('user_handle', '==', handle).stream()
        return {
            "credentials": self.get_user(handle),
            "likes": [from_firestore(doc.to_dict()) for doc in like_docs],
            "notifications": self.notification_service.get_notifications_for(handle)
        }

    def get_user_details(self, handle: str) -> Optional[Dict[str, Any]]:
        """Public profile plus the user's screams, or None for an unknown handle."""
        user = self.get_user(handle)
        if user is None:
            return None
        return {"user": user, "screams": self.scream_service.get_screams_by_handle(handle)}

    def upload_image(self, handle: str, file_stream: IO[bytes], filename: str, content_type: str) -> str:
        """
        Stores a new profile image and points the user document at it.
        The new URL is then copied onto the user's screams and comments.
        """
        before = self.get_user(handle)
        if before is None:
            raise ValueError("User not found")

        image_url = self.storage_service.upload_image(file_stream, filename, content_type)
        self.users_ref.document(handle).update({'image_url': image_url})
        logging.info(f"Profile image updated for {handle}")

        self.reactions.on_user_image_changed(before, {**before, 'image_url': image_url})
        return image_url
