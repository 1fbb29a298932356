import os
import re


class Config:
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'question-import-fallback-jwt-secret-change-in-production'

    # Bulk import settings
    BULK_IMPORT_MAX_CHARS = int(os.environ.get('BULK_IMPORT_MAX_CHARS', 500000))
    BULK_IMPORT_ID_PREFIX = os.environ.get('BULK_IMPORT_ID_PREFIX') or 'bulk'

    # Frontend Configuration
    FRONTEND_URL = os.environ.get('FRONTEND_URL') or 'http://localhost:5173'

    # CORS Configuration
    CORS_ORIGINS = [origin.strip() for origin in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173'
    ).split(',') if origin.strip()]

    CORS_ALLOW_HEADERS = [
        'Content-Type',
        'Authorization',
        'Access-Control-Allow-Credentials'
    ]
    CORS_METHODS = ['GET', 'POST', 'OPTIONS']
    CORS_SUPPORTS_CREDENTIALS = True


class DevelopmentConfig(Config):
    DEBUG = True
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'question-import-dev-jwt-secret-not-for-production'

    # Allow common private LAN ranges during development
    LAN_REGEX_ORIGINS = [
        re.compile(r"^http://192\.168\.\d{1,3}\.\d{1,3}(:\d+)?$"),
        re.compile(r"^http://10\.\d{1,3}\.\d{1,3}\.\d{1,3}(:\d+)?$"),
        re.compile(r"^http://172\.(1[6-9]|2\d|3[0-1])\.\d{1,3}\.\d{1,3}(:\d+)?$")
    ]

    CORS_ORIGINS = [*Config.CORS_ORIGINS, *LAN_REGEX_ORIGINS]


class TestingConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = 'question-import-test-jwt-secret'
    BULK_IMPORT_MAX_CHARS = 2000


class ProductionConfig(Config):
    DEBUG = False

    # Validate critical secrets in production
    def __init__(self):
        if not os.environ.get('JWT_SECRET_KEY'):
            raise ValueError("JWT_SECRET_KEY environment variable is required in production")


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
