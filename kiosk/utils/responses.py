"""Response envelope helpers."""
from flask import jsonify


def success_response(message, data=None, status_code=200):
    """Build a {success, message, data} JSON response."""
    return jsonify({'success': True, 'message': message, 'data': data}), status_code


def error_response(name, message, status_code, cause=None):
    """Build a {success: false, error} JSON response for errors raised outside KioskError."""
    error = {'name': name, 'message': message}
    if cause is not None:
        error['cause'] = cause
    return jsonify({'success': False, 'error': error}), status_code
