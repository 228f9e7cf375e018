# scream_backend/__init__.py

# =====================================================================================
# 1. Environment variables (loaded before anything reads them)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Imports
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials

# - config
from scream_backend.core.config import config_by_name

# - blueprints
from scream_backend.api.auth.routes import auth_bp
from scream_backend.api.users.routes import users_bp
from scream_backend.api.screams.routes import screams_bp
from scream_backend.api.notifications.routes import notifications_bp

# - services
from scream_backend.services.storage_service import StorageService
from scream_backend.services.notification_service import NotificationService
from scream_backend.services.reaction_service import ReactionService
from scream_backend.api.auth.services import AuthService
from scream_backend.api.users.services import UserService
from scream_backend.api.screams.services import ScreamService


def create_app(config_name: Optional[str] = None):
    """
    Flask application factory.
    """
    # =====================================================================================
    # 3. Flask app and config
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. Firebase
    # =====================================================================================
    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred, {
            'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
        })

    # =====================================================================================
    # 5. Services, stored on app.services (dependency injection)
    # =====================================================================================
    app.services = {}

    # 5-1. shared services
    try:
        storage_instance = StorageService()
        storage_instance.init_app(app)
        app.services['storage'] = storage_instance
        logging.info("Storage service initialized successfully")
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    app.services['notifications'] = NotificationService()
    app.services['reactions'] = ReactionService(notification_service=app.services['notifications'])

    # 5-2. domain services
    app.services['screams'] = ScreamService(reaction_service=app.services['reactions'])
    app.services['users'] = UserService(
        storage_service=app.services['storage'],
        scream_service=app.services['screams'],
        notification_service=app.services['notifications'],
        reaction_service=app.services['reactions']
    )

    auth_instance = AuthService(storage_service=app.services['storage'])
    auth_instance.init_app(app)
    app.services['auth'] = auth_instance

    # =====================================================================================
    # 6. Blueprints
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api')
    app.register_blueprint(screams_bp, url_prefix='/api')
    app.register_blueprint(notifications_bp, url_prefix='/api')

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        error_code = err.name.upper().replace(" ", "_")
        return jsonify({"error_code": error_code, "message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "Something went wrong"}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
