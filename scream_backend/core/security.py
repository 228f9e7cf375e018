# scream_backend/core/security.py
import logging
from functools import wraps
from flask import request, jsonify, g, current_app
from firebase_admin import auth as firebase_auth


def _unauthorized(message: str):
    return jsonify({"error_code": "UNAUTHORIZED", "message": message}), 403


def fb_auth_required(f):
    """
    Verifies the Firebase ID token in the Authorization header.

    On success `g.user` holds the decoded token claims plus the caller's
    `handle` and `image_url` taken from their user document.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            logging.warning("No token found in Authorization header")
            return _unauthorized("Authorization header is missing or invalid")

        id_token = auth_header.split(" ")[1]

        try:
            decoded_token = firebase_auth.verify_id_token(id_token)
        except (ValueError, firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError,
                firebase_auth.RevokedIdTokenError) as e:
            logging.warning(f"Error while verifying token: {e}")
            return _unauthorized("Invalid token")

        user = current_app.services['users'].get_user_by_uid(decoded_token['uid'])
        if not user:
            logging.warning(f"No user document for uid {decoded_token['uid']}")
            return _unauthorized("User not found")

        g.user = {**decoded_token, "handle": user['handle'], "image_url": user.get('image_url')}
        return f(*args, **kwargs)

    return decorated_function
