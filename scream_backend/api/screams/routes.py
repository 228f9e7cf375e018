# scream_backend/api/screams/routes.py
import logging
from flask import Blueprint, request, jsonify, g, current_app
from marshmallow import ValidationError

from scream_backend.core.security import fb_auth_required
from scream_backend.api.screams.schemas import (
    ScreamCreateSchema, CommentCreateSchema, ScreamListQuerySchema,
    ScreamResponseSchema, ScreamDetailResponseSchema, CommentResponseSchema
)
from scream_backend.api.screams.services import AlreadyLikedError, NotLikedError, InvalidCursorError

screams_bp = Blueprint('screams_bp', __name__)


def _not_found(message: str = "Scream not found"):
    return jsonify({"error_code": "SCREAM_NOT_FOUND", "message": message}), 404


@screams_bp.route('/screams', methods=['GET'])
def get_all_screams():
    """Scream feed, newest first. Pages only when ?limit= or ?cursor= is given."""
    scream_service = current_app.services['screams']
    try:
        args = ScreamListQuerySchema().load(request.args)
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    limit = args['limit']
    if args['cursor'] and not limit:
        limit = current_app.config['SCREAMS_PAGE_SIZE']
    try:
        screams, next_cursor = scream_service.get_screams(limit, args['cursor'])
        return jsonify({
            "screams": ScreamResponseSchema(many=True).dump(screams),
            "nextCursor": next_cursor
        }), 200
    except InvalidCursorError as e:
        return jsonify({"error_code": "INVALID_CURSOR", "message": str(e)}), 400
    except Exception as e:
        logging.error(f"Failed to fetch screams: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Something went wrong"}), 500


@screams_bp.route('/screams', methods=['POST'])
@fb_auth_required
def post_one_scream():
    scream_service = current_app.services['screams']
    try:
        data = ScreamCreateSchema().load(request.get_json(silent=True) or {})
        new_scream = scream_service.create_scream(g.user['handle'], g.user.get('image_url'), data['body'])
        return jsonify(ScreamResponseSchema().dump(new_scream)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"Scream creation error: {e}", exc_info=True)
        return jsonify({"error_code": "SCREAM_CREATION_FAILED", "message": "Something went wrong"}), 500


@screams_bp.route('/screams/<string:scream_id>', methods=['GET'])
def get_scream(scream_id: str):
    """A single scream with its comments."""
    scream_service = current_app.services['screams']
    scream = scream_service.get_scream(scream_id)
    if not scream:
        return _not_found()
    return jsonify(ScreamDetailResponseSchema().dump(scream)), 200


@screams_bp.route('/screams/<string:scream_id>', methods=['DELETE'])
@fb_auth_required
def delete_scream(scream_id: str):
    """Only the author may delete a scream."""
    scream_service = current_app.services['screams']
    try:
        scream_service.delete_scream(scream_id, g.user['handle'])
        return jsonify({"message": "Scream deleted successfully"}), 200
    except PermissionError as e:
        return jsonify({"error_code": "FORBIDDEN", "message": str(e)}), 403
    except ValueError as e:
        return _not_found(str(e))


@screams_bp.route('/screams/<string:scream_id>/like', methods=['GET'])
@fb_auth_required
def like_scream(scream_id: str):
    scream_service = current_app.services['screams']
    try:
        scream = scream_service.like_scream(scream_id, g.user['handle'])
        return jsonify(ScreamResponseSchema().dump(scream)), 200
    except AlreadyLikedError as e:
        return jsonify({"error_code": "ALREADY_LIKED", "message": str(e)}), 400
    except ValueError as e:
        return _not_found(str(e))


@screams_bp.route('/screams/<string:scream_id>/unlike', methods=['GET'])
@fb_auth_required
def unlike_scream(scream_id: str):
    scream_service = current_app.services['screams']
    try:
        scream = scream_service.unlike_scream(scream_id, g.user['handle'])
        return jsonify(ScreamResponseSchema().dump(scream)), 200
    except NotLikedError as e:
        return jsonify({"error_code": "NOT_LIKED", "message": str(e)}), 400
    except ValueError as e:
        return _not_found(str(e))


@screams_bp.route('/screams/<string:scream_id>/comment', methods=['POST'])
@fb_auth_required
def comment_on_scream(scream_id: str):
    scream_service = current_app.services['screams']
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        comment = scream_service.comment_on_scream(
            scream_id, g.user['handle'], g.user.get('image_url'), data['body']
        )
        return jsonify(CommentResponseSchema().dump(comment)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return _not_found(str(e))
    except Exception as e:
        logging.error(f"Comment creation error (scream_id: {scream_id}): {e}", exc_info=True)
        return jsonify({"error_code": "COMMENT_CREATION_FAILED", "message": "Something went wrong"}), 500
