import os

from dotenv import load_dotenv

# Deployment mode
APP_ENV = (os.environ.get('APP_ENV') or os.environ.get('FLASK_ENV')
           or os.environ.get('NODE_ENV') or 'development').lower()
IS_PRODUCTION = APP_ENV == 'production'

# .env files are a local development convenience only
if not IS_PRODUCTION:
    load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class ConfigError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


def resolve_database_url(url, is_production):
    """Normalize the store connection string.

    Hosted Postgres providers still hand out ``postgres://`` URLs, which
    SQLAlchemy no longer accepts.
    """
    if not url:
        if is_production:
            raise ConfigError('DATABASE_URL is not set')
        return 'sqlite:///' + os.path.join(BASE_DIR, 'waitlist.db')
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def engine_options(url, is_production):
    """Connection pool settings for the store."""
    if url.startswith('sqlite'):
        return {}
    options = {
        'pool_size': 20,
        'max_overflow': 0,
        'pool_timeout': 5,   # seconds to wait for a free connection
        'pool_recycle': 30,  # seconds before an idle connection is replaced
        'pool_pre_ping': True,
    }
    if is_production:
        options['connect_args'] = {'sslmode': 'require'}
    return options


# Flask settings
DEBUG = not IS_PRODUCTION

# Database settings (create_app resolves these into SQLALCHEMY_DATABASE_URI)
DATABASE_URL = os.environ.get('DATABASE_URL')
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Startup connectivity probe
DB_CONNECT_RETRIES = int(os.environ.get('DB_CONNECT_RETRIES', 5))
DB_CONNECT_RETRY_DELAY = float(os.environ.get('DB_CONNECT_RETRY_DELAY', 5))

# Server
PORT = int(os.environ.get('PORT', 3000))
TRUST_PROXY_HOPS = int(os.environ.get('TRUST_PROXY_HOPS', 1))
PUBLIC_DIR = os.environ.get('PUBLIC_DIR', os.path.join(BASE_DIR, 'public'))
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO' if IS_PRODUCTION else 'DEBUG')

# Rate limiting (API blueprint only)
API_RATE_LIMIT = os.environ.get('API_RATE_LIMIT', '100 per 15 minutes')
RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
RATELIMIT_HEADERS_ENABLED = True

# Admin listing
SIGNUPS_LIST_LIMIT = int(os.environ.get('SIGNUPS_LIST_LIMIT', 100))
