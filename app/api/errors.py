"""JSON error envelopes shared by the API blueprints."""
from flask import jsonify, current_app

from app.extensions import db


def first_message(messages):
    """Pull the first human readable message out of marshmallow's nested errors."""
    if isinstance(messages, dict):
        for value in messages.values():
            found = first_message(value)
            if found:
                return found
    elif isinstance(messages, (list, tuple)):
        for value in messages:
            found = first_message(value)
            if found:
                return found
    elif messages:
        return str(messages)
    return None


def validation_error_response(err):
    return jsonify({
        "error": first_message(err.messages) or "Validation failed",
        "details": err.messages
    }), 400


def store_error_response(e):
    db.session.rollback()
    message = str(getattr(e, 'orig', None) or e)
    current_app.logger.error(f"Database error: {message}")
    return jsonify({"error": message}), 500
