import logging
import os
from flask import Flask, jsonify, request
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

from fleetbooks.config import get_config
from fleetbooks.extensions import db, limiter, cors
from fleetbooks.utils.request_logger import RequestLogger

logger = logging.getLogger(__name__)

blueprints = [
    ('driver', '/api'),
    ('trip', '/api'),
    ('salary_payment', '/api'),
    ('cashier', '/api'),
    ('monthly_salary', '/api'),
    ('dashboard', '/api'),
    ('init', '/api'),
]


def setup_logging(config):
    handlers = [logging.StreamHandler()]
    logs_dir = getattr(config, 'LOGS_DIR', None)
    if logs_dir:
        os.makedirs(logs_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(logs_dir, 'app.log')))
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        handlers=handlers,
    )


def register_blueprints(app):
    for blueprint_name, prefix in blueprints:
        module = __import__(f'fleetbooks.api.{blueprint_name}', fromlist=[f'{blueprint_name}_bp'])
        blueprint = getattr(module, f'{blueprint_name}_bp')
        app.register_blueprint(blueprint, url_prefix=prefix)
        logger.info(f"Registered blueprint: {blueprint_name} with prefix: {prefix}")

    from fleetbooks.views import views_bp
    app.register_blueprint(views_bp)


def register_error_handlers(app):
    @app.errorhandler(RateLimitExceeded)
    def ratelimit_handler(e):
        logger.warning(f"Rate limit exceeded for {request.method} {request.url}")
        return jsonify({'error': 'Rate limit exceeded. Please try again later.'}), 429

    @app.errorhandler(HTTPException)
    def http_error(error):
        if not request.path.startswith('/api/'):
            return error
        if error.code == 404:
            logger.error(f"404 error for path: {request.path}")
            return jsonify({'error': 'API endpoint not found', 'path': request.path}), 404
        logger.error(f"{error.code} {error.name} for {request.method} {request.url}")
        return jsonify({'error': error.name, 'message': error.description, 'path': request.path}), error.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        logger.error(f"Unhandled exception for {request.method} {request.url}: {e}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500


def register_commands(app):
    @app.cli.command('seed')
    def seed():
        """Create the default drivers and cash balance on an empty database."""
        from fleetbooks.services.driver_service import DriverService
        drivers, existing = DriverService.seed_defaults()
        if existing:
            print(f"Drivers already initialized ({existing} found)")
        else:
            print(f"Initialized {len(drivers)} drivers")


def create_app(config_class=None):
    config_class = config_class or get_config()
    setup_logging(config_class)

    app = Flask(__name__)
    app.config.from_object(config_class)

    storage_path = app.config.get('STORAGE_PATH')
    if storage_path:
        os.makedirs(storage_path, exist_ok=True)

    db.init_app(app)
    limiter.init_app(app)
    cors.init_app(app, supports_credentials=True, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})
    logger.info("Database connected: %s",
                "sqlite" if "sqlite" in app.config.get("SQLALCHEMY_DATABASE_URI", "") else "non-sqlite")

    app.before_request(RequestLogger.before_request)
    app.after_request(RequestLogger.after_request)

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    @app.route('/api/health-check')
    def health_check():
        if not db.health_check():
            return jsonify({'status': 'error', 'database': 'unreachable'}), 503
        return jsonify({'status': 'ok', 'database': 'ok'}), 200

    @app.route('/favicon.ico')
    def favicon():
        return '', 204

    with app.app_context():
        import fleetbooks.models  # noqa: F401 - register tables
        db.create_all()

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host=app.config.get('FLASK_HOST', '0.0.0.0'),
            port=app.config.get('FLASK_PORT', 5000),
            debug=app.config.get('DEBUG', False))
