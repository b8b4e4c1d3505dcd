import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from a .env file if it exists
load_dotenv()
# SECURITY: avoid printing secrets / connection strings in stdout


class Config:
    # Default to False; individual env config classes can override
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY", "your_secret_key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI", "sqlite:///app.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "your_jwt_secret")

    # JWT settings. Tokens are issued by the host; this service only validates them.
    JWT_ACCESS_COOKIE_NAME = "access_token_cookie"
    JWT_COOKIE_SECURE = os.getenv("JWT_COOKIE_SECURE", "true").lower() == "true"
    JWT_COOKIE_CSRF_PROTECT = os.getenv("JWT_COOKIE_CSRF_PROTECT", "true").lower() == "true"
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60")))

    # Mount point of the bulk user admin API
    API_PREFIX = os.getenv("API_PREFIX", "/api/v1/bulk-user-admin")

    # Section a caller must hold to use any bulk user operation
    ADMIN_SECTION = os.getenv("ADMIN_SECTION", "users")

    # Number of users pulled from the directory before filtering/sorting.
    # Only this first page is filtered; larger directories are truncated.
    BULK_USER_ADMIN_FETCH_SIZE = int(os.getenv("BULK_USER_ADMIN_FETCH_SIZE", "1000"))

    LOG_DIR = os.getenv("LOG_DIR", "logs")


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEVELOPMENT_DATABASE_URI", "sqlite:///dev.db")
    # Permit insecure cookies in dev for convenience
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_CSRF_PROTECT = False


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    JWT_SECRET_KEY = os.getenv("TEST_JWT_SECRET_KEY", "test-secret-key-bulk-user-admin-0001")
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_CSRF_PROTECT = False


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI", "sqlite:///prod.db")
