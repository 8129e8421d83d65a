import logging
import os
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_compress import Compress
from flask_cors import CORS

from ors.utils.logging_utils import get_logger, init_logger

from .commands.seed_commands import seed_command
from .routes import register_blueprints

# Load environment variables from .env file
load_dotenv()

from .config import config, Config
from .exceptions import StorageError
from .extensions import db, jwt, ma, migrate
from .models import *  # noqa: F401,F403  register tables on the metadata


def configure_logging(app):
    log_file = app.config.get('LOG_FILE', '/tmp/ors_app.log')
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    if not app.logger.handlers:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=app.config.get('LOG_MAX_BYTES', 10485760),
            backupCount=app.config.get('LOG_BACKUP_COUNT', 5)
        )
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(getattr(logging, app.config.get('LOG_LEVEL', 'INFO')))
        app.logger.addHandler(file_handler)

    app.logger.setLevel(getattr(logging, app.config.get('LOG_LEVEL', 'INFO')))
    app.logger.info("Logging configured with level: %s", app.config.get('LOG_LEVEL', 'INFO'))

    # categorised loggers share the same application config
    init_logger(app)


def register_error_handlers(app):
    @app.errorhandler(StorageError)
    def _storage_error(e):
        get_logger("error").error("Storage failure: %s", e, exc_info=e)
        return jsonify({"view": "error", "message": str(e)}), 500

    @app.errorhandler(404)
    def _not_found(e):
        return jsonify({"view": "error", "message": "Not Found"}), 404

    @app.errorhandler(500)
    def _server_error(e):
        get_logger("error").exception("Unhandled server error")
        return jsonify({"view": "error", "message": "internal_server_error"}), 500


def create_app(config_name=None):
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'default')

    config_class = config.get(config_name, Config)

    app = Flask(__name__)
    app.config.from_object(config_class)
    config_class.init_app(app)

    configure_logging(app)
    app.logger.info("Using config: %s", config_class.__name__)
    get_logger("app").info("Application startup with config %s", config_class.__name__)

    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)
    jwt.init_app(app)
    app.cli.add_command(seed_command)

    register_error_handlers(app)

    Compress(app)
    CORS(app, supports_credentials=True, origins=app.config.get('CORS_ORIGINS', '*'))
    app.logger.info("Middleware loaded: Compress, CORS")

    register_blueprints(app)
    app.logger.info("Blueprints registered.")

    app.logger.info("Flask app created successfully.")
    return app
