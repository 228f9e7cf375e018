# scream_backend/core/config.py

import os


class Config:
    """Settings shared by every environment. Values come from the environment (.env)."""
    # Bucket that holds profile images, e.g. "my-project.appspot.com"
    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')
    # Web API key used for the Identity Toolkit password sign-in endpoint
    FIREBASE_WEB_API_KEY = os.getenv('FIREBASE_WEB_API_KEY')
    IDENTITY_TOOLKIT_URL = os.getenv(
        'IDENTITY_TOOLKIT_URL',
        'https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword'
    )
    # Placeholder image assigned to every new account
    NO_IMAGE_FILENAME = os.getenv('NO_IMAGE_FILENAME', 'no-image.jpeg')
    ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png')
    SCREAMS_PAGE_SIZE = int(os.getenv('SCREAMS_PAGE_SIZE', 20))
    # Flask answers larger request bodies (image uploads) with 413
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_UPLOAD_MB', 5)) * 1024 * 1024


class DevelopmentConfig(Config):
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')


class TestingConfig(Config):
    """Used by the pytest suite; Firebase is patched out so no credentials are needed."""
    TESTING = True
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    FIREBASE_STORAGE_BUCKET = 'test-bucket.appspot.com'
    FIREBASE_WEB_API_KEY = 'test-api-key'


class ProductionConfig(Config):
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')


# create_app() picks the class from FLASK_ENV
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
