# scream_backend/api/screams/services.py
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from firebase_admin import firestore

from scream_backend.models.comment import Comment
from scream_backend.models.like import Like, like_id_for
from scream_backend.models.scream import Scream
from scream_backend.services.reaction_service import ReactionService
from scream_backend.utils.datetime_utils import for_firestore, from_firestore


class AlreadyLikedError(Exception):
    pass


class NotLikedError(Exception):
    pass


class InvalidCursorError(Exception):
    pass


class ScreamService:
    """
    Scream, comment and like handling.
    Counter updates run in the same transaction as the document they count.
    """
    def __init__(self, reaction_service: ReactionService):
        self.db = firestore.client()
        self.screams_ref = self.db.collection('screams')
        self.comments_ref = self.db.collection('comments')
        self.likes_ref = self.db.collection('likes')
        self.reactions = reaction_service

    @staticmethod
    def _to_scream(doc) -> Dict[str, Any]:
        return {**from_firestore(doc.to_dict()), 'scream_id': doc.id}

    def get_screams(self, limit: Optional[int] = None,
                    cursor: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """
        Newest screams first. Without `limit` every scream is returned.
        `cursor` is the id of the last scream of the previous page.

        :raises InvalidCursorError: the cursor scream no longer exists
        """
        query = self.screams_ref.order_by('created_at', direction=firestore.Query.DESCENDING)
        if cursor:
            cursor_doc = self.screams_ref.document(cursor).get()
            if not cursor_doc.exists:
                raise InvalidCursorError(f"Unknown cursor: {cursor}")
            query = query.start_after(cursor_doc)
        if limit:
            query = query.limit(limit)

        screams = [self._to_scream(doc) for doc in query.stream()]
        next_cursor = screams[-1]['scream_id'] if limit and len(screams) == limit else None
        return screams, next_cursor

    def get_screams_by_handle(self, handle: str) -> List[Dict[str, Any]]:
        docs = (self.screams_ref
                .where('user_handle', '==', handle)
                .order_by('created_at', direction=firestore.Query.DESCENDING)
                .stream())
        return [self._to_scream(doc) for doc in docs]

    def create_scream(self, user_handle: str, user_image: Optional[str], body: str) -> Dict[str, Any]:
        new_scream = Scream(body=body, user_handle=user_handle, user_image=user_image)
        scream_data = for_firestore(asdict(new_scream))
        try:
            _, doc_ref = self.screams_ref.add(scream_data)
        except Exception as e:
            logging.error(f"Scream creation failed (handle: {user_handle}): {e}", exc_info=True)
            raise
        logging.info(f"Scream {doc_ref.id} created by {user_handle}")
        return {**scream_data, 'scream_id': doc_ref.id}

    def get_scream(self, scream_id: str) -> Optional[Dict[str, Any]]:
        """The scream with its comments (newest first), or None."""
        doc = self.screams_ref.document(scream_id).get()
        if not doc.exists:
            return None

        scream = self._to_scream(doc)
        comment_docs = (self.comments_ref
                        .where('scream_id', '==', scream_id)
                        .order_by('created_at', direction=firestore.Query.DESCENDING)
                        .stream())
        scream['comments'] = [{**from_firestore(c.to_dict()), 'comment_id': c.id} for c in comment_docs]
        return scream

    def delete_scream(self, scream_id: str, user_handle: str) -> None:
        """
        :raises ValueError: the scream does not exist
        :raises PermissionError: the caller is not the author
        """
        scream_ref = self.screams_ref.document(scream_id)
        doc = scream_ref.get()
        if not doc.exists:
            raise ValueError("Scream not found")
        if doc.to_dict().get('user_handle') != user_handle:
            raise PermissionError("Unauthorized")

        scream_ref.delete()
        logging.info(f"Scream {scream_id} deleted by {user_handle}")
        self.reactions.on_scream_deleted(scream_id)

    # --- likes ---

    def _apply_like(self, transaction, scream_id: str, user_handle: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Transaction body: create the like and bump like_count."""
        scream_ref = self.screams_ref.document(scream_id)
        like_ref = self.likes_ref.document(like_id_for(user_handle, scream_id))

        scream_doc = scream_ref.get(transaction=transaction)
        like_doc = like_ref.get(transaction=transaction)
        if not scream_doc.exists:
            raise ValueError("Scream not found")
        if like_doc.exists:
            raise AlreadyLikedError("Scream already liked")

        like_data = for_firestore(asdict(Like(user_handle=user_handle, scream_id=scream_id)))
        transaction.set(like_ref, like_data)
        transaction.update(scream_ref, {'like_count': firestore.Increment(1)})

        scream = self._to_scream(scream_doc)
        scream['like_count'] = scream.get('like_count', 0) + 1
        return scream, like_data

    def _apply_unlike(self, transaction, scream_id: str, user_handle: str) -> Dict[str, Any]:
        """Transaction body: delete the like and drop like_count."""
        scream_ref = self.screams_ref.document(scream_id)
        like_ref = self.likes_ref.document(like_id_for(user_handle, scream_id))

        scream_doc = scream_ref.get(transaction=transaction)
        like_doc = like_ref.get(transaction=transaction)
        if not scream_doc.exists:
            raise ValueError("Scream not found")
        if not like_doc.exists:
            raise NotLikedError("Scream not liked")

        transaction.delete(like_ref)
        transaction.update(scream_ref, {'like_count': firestore.Increment(-1)})

        scream = self._to_scream(scream_doc)
        scream['like_count'] = max(scream.get('like_count', 0) - 1, 0)
        return scream

    def like_scream(self, scream_id: str, user_handle: str) -> Dict[str, Any]:
        """
        :raises ValueError: the scream does not exist
        :raises AlreadyLikedError: the user already likes it
        """
        transaction = self.db.transaction()
        scream, like_data = firestore.transactional(self._apply_like)(transaction, scream_id, user_handle)
        self.reactions.on_like_created(like_id_for(user_handle, scream_id), like_data)
        return scream

    def unlike_scream(self, scream_id: str, user_handle: str) -> Dict[str, Any]:
        """
        :raises ValueError: the scream does not exist
        :raises NotLikedError: the user does not like it
        """
        transaction = self.db.transaction()
        scream = firestore.transactional(self._apply_unlike)(transaction, scream_id, user_handle)
        self.reactions.on_like_deleted(like_id_for(user_handle, scream_id))
        return scream

    # --- comments ---

    def _apply_comment(self, transaction, scream_id: str, comment: Comment) -> Tuple[str, Dict[str, Any]]:
        """Transaction body: store the comment and bump comment_count."""
        scream_ref = self.screams_ref.document(scream_id)
        scream_doc = scream_ref.get(transaction=transaction)
        if not scream_doc.exists:
            raise ValueError("Scream not found")

        comment_ref = self.comments_ref.document()
        comment_data = for_firestore(asdict(comment))
        transaction.set(comment_ref, comment_data)
        transaction.update(scream_ref, {'comment_count': firestore.Increment(1)})
        return comment_ref.id, comment_data

    def comment_on_scream(self, scream_id: str, user_handle: str, user_image: Optional[str], body: str) -> Dict[str, Any]:
        """
        :raises ValueError: the scream does not exist
        """
        comment = Comment(scream_id=scream_id, body=body, user_handle=user_handle, user_image=user_image)
        transaction = self.db.transaction()
        comment_id, comment_data = firestore.transactional(self._apply_comment)(transaction, scream_id, comment)
        logging.info(f"Comment {comment_id} added to scream {scream_id} by {user_handle}")
        self.reactions.on_comment_created(comment_id, comment_data)
        return {**comment_data, 'comment_id': comment_id}
