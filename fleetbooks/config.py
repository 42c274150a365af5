import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration - shared across all environments"""

    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # Owner password gate for analytics dashboards
    OWNER_PASSWORD = os.environ.get('OWNER_PASSWORD', 'uber1234')
    OWNER_PASSWORD_HEADER = 'X-Owner-Password'

    # Rate limiting
    RATELIMIT_DEFAULT = "1000 per day;500 per hour"
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    OWNER_AUTH_RATE_LIMIT = "10 per minute"

    # CORS origins for the /api/* surface
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'ALLOWED_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
        ).split(',')
        if origin.strip()
    ]

    # Display timezone used for "today", week and month windows
    DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE', 'Asia/Kolkata')

    # Pagination
    DEFAULT_PAGE_SIZE = 50
    MAX_PAGE_SIZE = 500

    # Platform commission rules
    UBER_DAILY_COMMISSION = 117.0
    YATRI_COMMISSION_PER_TRIP = 10.0

    # Risk thresholds
    PENDING_SALARY_ALERT = 5000.0
    PENDING_SALARY_CRITICAL = 10000.0
    ONLINE_PAYMENT_ALERT = 5000.0
    ONLINE_PAYMENT_CRITICAL = 15000.0
    DAILY_REVENUE_TARGET = 10000.0

    # Default roster seeded by /api/init
    DEFAULT_DRIVERS = [
        {'name': 'Vivek Bali', 'commission_percentage': 30},
        {'name': 'Preetam', 'commission_percentage': 35},
        {'name': 'Chhotelal', 'commission_percentage': 35},
        {'name': 'Vikash Yadav', 'commission_percentage': 35},
    ]

    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    LOGS_DIR = os.environ.get('LOGS_DIR', os.path.join(BASE_DIR, 'logs'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    FLASK_HOST = '0.0.0.0'
    FLASK_PORT = 5000

    STORAGE_PATH = str(Path(__file__).resolve().parents[1] / "fleetbooks-storage" / "database")
    DB_PATH = os.path.join(STORAGE_PATH, 'fleetbooks.db')
    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI', f"sqlite:///{DB_PATH}")


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    FLASK_HOST = '::'
    FLASK_PORT = int(os.environ.get('PORT', 5000))

    STORAGE_PATH = os.environ.get(
        'STORAGE_PATH',
        str(Path(__file__).resolve().parents[1] / "fleetbooks-storage" / "database"))
    DB_PATH = os.path.join(STORAGE_PATH, 'fleetbooks.db')
    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI', f"sqlite:///{DB_PATH}")


class TestConfig(Config):
    """Test configuration - in-memory database, no log file"""
    TESTING = True
    DEBUG = False
    SECRET_KEY = 'test-secret-key'
    OWNER_PASSWORD = 'owner-test'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    STORAGE_PATH = None
    LOGS_DIR = None
    RATELIMIT_ENABLED = False


CONFIGS = {
    'development': DevConfig,
    'production': ProductionConfig,
    'testing': TestConfig,
}


def get_config(name=None):
    """Resolve the configuration class from FLEETBOOKS_ENV (default: development)."""
    name = name or os.environ.get('FLEETBOOKS_ENV', 'development')
    try:
        return CONFIGS[name]
    except KeyError:
        raise ValueError(f"Unknown FLEETBOOKS_ENV '{name}'. Expected one of: {', '.join(CONFIGS)}")
