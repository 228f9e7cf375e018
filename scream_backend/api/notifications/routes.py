# scream_backend/api/notifications/routes.py
import logging
from flask import Blueprint, request, jsonify, g, current_app
from marshmallow import ValidationError

from scream_backend.core.security import fb_auth_required
from scream_backend.api.notifications.schemas import notification_ids_field

notifications_bp = Blueprint('notifications_bp', __name__)


@notifications_bp.route('/notifications', methods=['POST'])
@fb_auth_required
def mark_notifications_read():
    """Marks the listed notifications of the current user as read."""
    notification_service = current_app.services['notifications']
    try:
        notification_ids = notification_ids_field.deserialize(request.get_json(silent=True))
        updated = notification_service.mark_read(g.user['handle'], notification_ids)
        return jsonify({"message": "Notifications marked read", "updated": updated}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"Marking notifications read failed: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Something went wrong"}), 500
