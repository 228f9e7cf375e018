# scream_backend/services/firebase_auth_service.py

import logging
import requests


class InvalidCredentialsError(Exception):
    """Firebase rejected the e-mail / password pair."""


class FirebaseAuthService:
    """Talks to the Firebase Identity Toolkit REST API for password sign-in."""

    # Error codes the Identity Toolkit returns for a bad e-mail / password pair
    _credential_errors = (
        "EMAIL_NOT_FOUND",
        "INVALID_PASSWORD",
        "INVALID_LOGIN_CREDENTIALS",
        "INVALID_EMAIL",
        "USER_DISABLED",
    )

    @staticmethod
    def sign_in_with_password(email: str, password: str, api_key: str, url: str, timeout: int = 10) -> str:
        """
        Signs the user in and returns a Firebase ID token.

        :raises InvalidCredentialsError: the e-mail / password pair was rejected
        :raises requests.HTTPError: any other failure of the endpoint
        """
        response = requests.post(
            url,
            params={"key": api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
            timeout=timeout
        )

        if response.status_code == 400:
            error_message = response.json().get("error", {}).get("message", "")
            # Messages look like "INVALID_PASSWORD" or "INVALID_LOGIN_CREDENTIALS : ..."
            if error_message.split(" ")[0] in FirebaseAuthService._credential_errors:
                logging.info(f"Password sign-in rejected: {error_message}")
                raise InvalidCredentialsError(error_message)

        response.raise_for_status()
        return response.json()["idToken"]
