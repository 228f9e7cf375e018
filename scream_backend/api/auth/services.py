# scream_backend/api/auth/services.py
import logging
from dataclasses import asdict
from typing import Optional

from firebase_admin import firestore, auth as firebase_auth
from google.api_core.exceptions import Conflict
from flask import Flask

from scream_backend.models.user import User
from scream_backend.services.firebase_auth_service import FirebaseAuthService
from scream_backend.services.storage_service import StorageService
from scream_backend.utils.datetime_utils import for_firestore


class HandleTakenError(Exception):
    pass


class EmailInUseError(Exception):
    pass


class AuthService:
    """Account creation and password sign-in backed by Firebase Auth."""

    def __init__(self, storage_service: StorageService):
        self.db = None
        self.users_ref = None
        self.storage_service = storage_service
        self.app: Optional[Flask] = None

    def init_app(self, app: Flask):
        """Binds the Firestore client and the app config. Called once from create_app()."""
        self.db = firestore.client()
        self.users_ref = self.db.collection('users')
        self.app = app

    def _sign_in(self, email: str, password: str) -> str:
        return FirebaseAuthService.sign_in_with_password(
            email, password,
            api_key=self.app.config['FIREBASE_WEB_API_KEY'],
            url=self.app.config['IDENTITY_TOOLKIT_URL']
        )

    def signup(self, email: str, password: str, handle: str) -> str:
        """
        Creates the Firebase account and the user document, returns an ID token.

        :raises HandleTakenError: a user document with this handle exists
        :raises EmailInUseError: Firebase already has an account for the e-mail
        """
        user_ref = self.users_ref.document(handle)
        if user_ref.get().exists:
            raise HandleTakenError("This handle is already taken")

        try:
            user_record = firebase_auth.create_user(email=email, password=password)
        except firebase_auth.EmailAlreadyExistsError:
            raise EmailInUseError("Email is already in use")

        new_user = User(
            user_id=user_record.uid,
            handle=handle,
            email=email,
            image_url=self.storage_service.download_url(self.app.config['NO_IMAGE_FILENAME'])
        )
        try:
            user_ref.create(for_firestore(asdict(new_user)))
        except Conflict:
            # another signup claimed the handle after the check above
            firebase_auth.delete_user(user_record.uid)
            raise HandleTakenError("This handle is already taken")
        logging.info(f"User signed up: {handle} (uid: {user_record.uid})")
        return self._sign_in(email, password)

    def login(self, email: str, password: str) -> str:
        """
        :raises InvalidCredentialsError: wrong e-mail or password
        """
        return self._sign_in(email, password)
