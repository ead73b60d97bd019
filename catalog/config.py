import os

BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def _env_flag(name, default="false"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- Config ---
class Config:
    SECRET_KEY = os.environ.get('CATALOG_SECRET') or "dev-secret-change-me"
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f"sqlite:///{os.path.join(BASE_DIR, 'catalog.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get('CATALOG_LOG_LEVEL', 'INFO').upper()
    FORCE_HTTPS = _env_flag('CATALOG_FORCE_HTTPS')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    FORCE_HTTPS = False
    LOG_LEVEL = "DEBUG"
