# nichegen/app.py
import os
import logging
from datetime import datetime
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from .config import AppConfig, get_config
from .services import EXTENSION_KEY, Services, build_services


def create_app(config_object: Optional[AppConfig] = None, services: Optional[Services] = None) -> Flask:
    """Application factory pattern for Flask app"""
    # Load environment variables from .env file
    load_dotenv()

    app = Flask(__name__)

    config = config_object or get_config()
    app.config.from_object(config)

    # Keep JSON keys in insertion order
    app.json.sort_keys = False
    app.json.compact = True

    CORS(app,
         resources={r"/api/*": {
             "origins": config.CORS_ORIGINS,
             "methods": ["GET", "POST", "DELETE", "OPTIONS"],
             "allow_headers": ["Content-Type", "Authorization"]
         }})

    configure_logging(app)

    app.extensions[EXTENSION_KEY] = services or build_services(config)

    register_blueprints(app)

    return app


def configure_logging(app: Flask):
    """Configure logging for the application"""
    handlers = [logging.StreamHandler()]

    if app.config.get('LOG_TO_FILE'):
        log_dir = app.config['LOG_DIR']
        os.makedirs(log_dir, exist_ok=True)
        # Use iso date format in filename for better sorting
        timestamp = datetime.now().strftime('%Y%m%d')
        log_file = os.path.join(log_dir, f'backend_{timestamp}.log')
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if app.config.get('DEBUG') else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )

    return logging.getLogger(__name__)


def register_blueprints(app: Flask):
    """Register Flask blueprints"""
    from .routes.frontend_api import frontend_api
    from .routes.site import site

    app.register_blueprint(frontend_api)
    app.register_blueprint(site)
    app.logger.info("Registered API and site blueprints")
