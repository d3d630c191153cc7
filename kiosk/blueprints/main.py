"""Main blueprint: service root and health check."""
from flask import Blueprint, current_app, jsonify
from kiosk.database import check_connection

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """Report whether the database is reachable."""
    if check_connection():
        return jsonify({'status': 'ok', 'database': 'up'}), 200
    current_app.logger.error("Health check failed: database unreachable")
    return jsonify({'status': 'error', 'database': 'down'}), 503
