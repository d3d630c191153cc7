"""Flask application factory."""
import atexit
import logging
import os
import traceback
from flask import Flask
from werkzeug.exceptions import HTTPException
from kiosk.database import init_db, check_connection, shutdown_db


def _configure_logging(app):
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    app.logger.setLevel(level)


def _init_sentry(app):
    """Initialize Sentry for error tracking in production."""
    dsn = app.config.get('SENTRY_DSN')
    if dsn and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 0.1),
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )


def _register_error_handlers(app):
    from kiosk.exceptions import KioskError
    from kiosk.utils.responses import error_response
    from flask import jsonify

    @app.errorhandler(KioskError)
    def handle_kiosk_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"{error.name} [{error.status_code}]: {error.message} ({error.cause})")
        else:
            app.logger.info(f"{error.name} [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return error_response(error.name.replace(' ', ''), error.description, error.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return error_response('InternalServerError', 'Internal Server Error', 500)


def create_app(config_object='config.Config', test_config=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    if test_config:
        app.config.update(test_config)

    _configure_logging(app)
    _init_sentry(app)

    # Prometheus metrics instrumentation
    from kiosk.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Initialize database
    init_db(app)
    if not app.config.get('TESTING'):
        if check_connection():
            app.logger.info("Database connection established")
        else:
            app.logger.warning("Database not reachable at startup")
        atexit.register(shutdown_db)

    _register_error_handlers(app)

    # Register blueprints
    from kiosk.blueprints.main import main_bp
    from kiosk.blueprints.products import products_bp
    from kiosk.blueprints.sales import sales_bp
    from kiosk.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from kiosk.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
