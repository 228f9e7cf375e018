# scream_backend/api/auth/routes.py

import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from scream_backend.api.auth.schemas import SignupSchema, LoginSchema
from scream_backend.api.auth.services import HandleTakenError, EmailInUseError
from scream_backend.services.firebase_auth_service import InvalidCredentialsError

auth_bp = Blueprint('auth_bp', __name__)


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Registers a user with e-mail, password and a unique handle."""
    auth_service = current_app.services['auth']
    try:
        data = SignupSchema().load(request.get_json(silent=True) or {})
        token = auth_service.signup(data['email'], data['password'], data['handle'])
        return jsonify({"token": token}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except HandleTakenError as e:
        return jsonify({"error_code": "HANDLE_TAKEN", "message": str(e), "details": {"handle": [str(e)]}}), 400
    except EmailInUseError as e:
        return jsonify({"error_code": "EMAIL_IN_USE", "message": str(e), "details": {"email": [str(e)]}}), 400
    except Exception as e:
        logging.error(f"Signup failed: {e}", exc_info=True)
        return jsonify({"error_code": "SIGNUP_FAILED", "message": "Something went wrong, please try again"}), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    auth_service = current_app.services['auth']
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
        token = auth_service.login(data['email'], data['password'])
        return jsonify({"token": token}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except InvalidCredentialsError:
        return jsonify({"error_code": "INVALID_CREDENTIALS", "message": "Wrong credentials, please try again"}), 403
    except Exception as e:
        logging.error(f"Login failed: {e}", exc_info=True)
        return jsonify({"error_code": "LOGIN_FAILED", "message": "Something went wrong, please try again"}), 500
