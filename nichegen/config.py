"""
Configuration management for the NicheGen backend.
Centralizes path configuration, provider credentials and environment-specific settings.
"""
import os
import logging
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

DEFAULT_JWT_SECRET = 'development-secret-key-change-me'


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _as_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


class AppConfig:
    """
    Settings read from the environment when the object is created.

    Attribute names are upper case so the instance can be handed straight to
    ``Flask.config.from_object``.
    """

    TESTING = False

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ

        # Base directories
        self.BASE_DIR = env.get('APP_BASE_DIR', os.path.dirname(PACKAGE_DIR))
        self.DATA_DIR = env.get('APP_DATA_DIR', os.path.join(self.BASE_DIR, 'data'))
        self.LOG_DIR = env.get('APP_LOG_DIR', os.path.join(self.BASE_DIR, 'logs'))
        self.LOG_TO_FILE = _as_bool(env.get('APP_LOG_TO_FILE'), default=True)

        # Environment settings
        self.DEBUG = _as_bool(env.get('APP_DEBUG'))
        self.ENVIRONMENT = env.get('APP_ENVIRONMENT', 'development')

        # API settings
        self.API_HOST = env.get('APP_API_HOST', '127.0.0.1')
        self.API_PORT = int(env.get('APP_API_PORT', '5000'))
        self.API_THREADS = int(env.get('APP_API_THREADS', '8'))
        self.CORS_ORIGINS = _as_list(env.get('CORS_ORIGINS')) or [
            'http://localhost:3000',
            'http://127.0.0.1:3000',
            'http://localhost:5000',
            'http://127.0.0.1:5000',
        ]

        # Database
        self.DATABASE_URL = env.get(
            'DATABASE_URL',
            'sqlite:///' + os.path.join(self.DATA_DIR, 'nichegen.db'),
        )

        # Auth
        self.JWT_SECRET = env.get('JWT_SECRET') or env.get('FLASK_SECRET_KEY') or DEFAULT_JWT_SECRET
        self.JWT_EXPIRATION_DAYS = int(env.get('JWT_EXPIRATION_DAYS', '30'))
        self.SECRET_KEY = env.get('FLASK_SECRET_KEY', self.JWT_SECRET)

        # Web search
        self.TAVILY_API_KEY = env.get('TAVILY_API_KEY', '')
        self.SEARCH_MAX_RESULTS = int(env.get('SEARCH_MAX_RESULTS', '5'))
        self.SEARCH_DEPTH = env.get('SEARCH_DEPTH', 'advanced')

        # Draft provider (Groq, OpenAI compatible API)
        self.GROQ_API_KEY = env.get('GROQ_API_KEY', '')
        self.GROQ_MODEL = env.get('GROQ_MODEL', 'llama-3.3-70b-versatile')
        self.GROQ_BASE_URL = env.get('GROQ_BASE_URL', 'https://api.groq.com/openai/v1')

        # Refinement provider (Gemini); keys are tried in this order
        self.GEMINI_API_KEYS = [
            key for key in (
                env.get('GEMINI_API_KEY', ''),
                env.get('GEMINI_API_KEY_2', ''),
                env.get('GEMINI_API_KEY_3', ''),
            ) if key
        ]
        self.GEMINI_MODEL = env.get('GEMINI_MODEL', 'gemini-2.0-flash')

        # Image generation
        self.IMAGE_API_URL = env.get('IMAGE_API_URL', 'https://api.openai.com/v1/images/generations')
        self.IMAGE_API_KEY = env.get('IMAGE_API_KEY', '')
        self.IMAGE_MODEL = env.get('IMAGE_MODEL', 'dall-e-3')
        self.IMAGE_SIZE = env.get('IMAGE_SIZE', '1024x1024')

        # Outbound HTTP
        self.PROVIDER_TIMEOUT = float(env.get('PROVIDER_TIMEOUT', '60'))

    def initialize(self):
        """Create the data and log directories if they don't exist"""
        for directory in (self.DATA_DIR, self.LOG_DIR):
            os.makedirs(directory, exist_ok=True)

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT.lower() == 'production'


class TestingConfig(AppConfig):
    """In-memory database, no provider keys and no log files."""

    TESTING = True

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        super().__init__(environ={} if environ is None else environ)
        self.DATABASE_URL = 'sqlite://'
        self.LOG_TO_FILE = False
        self.JWT_SECRET = 'testing-secret-key-with-enough-length'
        self.SECRET_KEY = self.JWT_SECRET

    def initialize(self):
        pass


def get_config() -> AppConfig:
    """Returns the configuration object for the current environment."""
    config = AppConfig()
    config.initialize()
    logger.info(f"Using database at: {config.DATABASE_URL.split('@')[-1]}")
    if config.is_production() and config.JWT_SECRET == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set in production; tokens are signed with the development key")
    return config
