# backend/errors.py
from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_response(self):
        return jsonify({"status": "error", "error": self.message}), self.status_code


class ClientInputError(ApiError):
    status_code = 400
    message = "Invalid request"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class Conflict(ApiError):
    # duplicates answer 400, not 409
    status_code = 400
    message = "Already exists"


class InternalError(ApiError):
    pass


class ImageUploadError(InternalError):
    pass


def register_error_handlers(app, db):
    @app.errorhandler(ApiError)
    def handle_api_error(e):
        db.session.rollback()
        if e.status_code >= 500:
            current_app.logger.error("%s: %s", type(e).__name__, e, exc_info=e.__cause__ or e)
            return jsonify({"status": "error", "error": "Internal server error"}), e.status_code
        return e.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"status": "error", "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        current_app.logger.exception("Unhandled error: %s", e)
        return jsonify({"status": "error", "error": "Internal server error"}), 500
