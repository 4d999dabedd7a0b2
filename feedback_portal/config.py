import os


def _database_url(default: str) -> str:
    url = os.environ.get("DATABASE_URL") or default
    # Hosted Postgres still hands out postgres:// URLs; SQLAlchemy 2.x wants postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class BaseConfig:
    # Secrets (env in prod; dev/test may use defaults)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-not-secure")

    # Database (env in prod; dev defaults to a local SQLite file)
    SQLALCHEMY_DATABASE_URI = _database_url("sqlite:///officers.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # One pooled engine per process; drop dead connections before handing them out
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Logging / misc
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Mobile client talks to us cross-origin
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Flask-Limiter: no global default, per-route limits only
    RATELIMIT_DEFAULT = None
    RATELIMIT_HEADERS_ENABLED = True
    FEEDBACK_RATE_LIMIT = os.environ.get("FEEDBACK_RATE_LIMIT", "30 per minute")

    SITE_NAME = os.getenv("SITE_NAME", "Officer Feedback Portal")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
    # SECRET_KEY / DATABASE_URL presence is enforced in create_app()


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_ENABLED = False


_ENV_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "staging": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    env = os.environ.get("APP_ENV", "development").lower()
    return _ENV_MAP.get(env, DevelopmentConfig)
