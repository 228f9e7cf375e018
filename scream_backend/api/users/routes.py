# scream_backend/api/users/routes.py
import logging
from flask import Blueprint, request, jsonify, g, current_app
from marshmallow import ValidationError

from scream_backend.core.security import fb_auth_required
from scream_backend.api.users.schemas import (
    UserDetailsSchema, AuthenticatedUserResponseSchema, UserDetailsResponseSchema
)

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/user', methods=['POST'])
@fb_auth_required
def add_user_details():
    """Updates bio, website and location of the current user."""
    user_service = current_app.services['users']
    try:
        details = UserDetailsSchema().load(request.get_json(silent=True) or {})
        user_service.update_user_details(g.user['handle'], details)
        return jsonify({"message": "Details added successfully"}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"User details update error (handle: {g.user['handle']}): {e}", exc_info=True)
        return jsonify({"error_code": "UPDATE_FAILED", "message": "Something went wrong"}), 500


@users_bp.route('/user', methods=['GET'])
@fb_auth_required
def get_authenticated_user():
    user_service = current_app.services['users']
    try:
        user_data = user_service.get_authenticated_user(g.user['handle'])
        return jsonify(AuthenticatedUserResponseSchema().dump(user_data)), 200
    except Exception as e:
        logging.error(f"Authenticated user fetch error (handle: {g.user['handle']}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Something went wrong"}), 500


@users_bp.route('/user/<string:handle>', methods=['GET'])
def get_user_details(handle: str):
    """Public profile of any user with their screams."""
    user_service = current_app.services['users']
    user_data = user_service.get_user_details(handle)
    if not user_data:
        return jsonify({"error_code": "USER_NOT_FOUND", "message": "User not found"}), 404
    return jsonify(UserDetailsResponseSchema().dump(user_data)), 200


@users_bp.route('/user/image', methods=['POST'])
@fb_auth_required
def upload_image():
    """
    Multipart upload of a new profile image (form field 'image').
    Only JPEG and PNG are accepted.
    """
    user_service = current_app.services['users']
    image = request.files.get('image')
    if image is None or not image.filename:
        return jsonify({"error_code": "INVALID_PAYLOAD", "message": "An 'image' file is required"}), 400

    if image.mimetype not in current_app.config['ALLOWED_IMAGE_TYPES']:
        return jsonify({"error_code": "INVALID_FILE_TYPE", "message": "Wrong file type submitted"}), 400

    try:
        image_url = user_service.upload_image(g.user['handle'], image.stream, image.filename, image.mimetype)
        return jsonify({"message": "Image uploaded successfully", "imageUrl": image_url}), 200
    except ValueError as e:
        return jsonify({"error_code": "USER_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Image upload error (handle: {g.user['handle']}): {e}", exc_info=True)
        return jsonify({"error_code": "UPLOAD_FAILED", "message": "Something went wrong"}), 500
