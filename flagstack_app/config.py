# File: flagstack_app/config.py
# Application configuration. Every value can be overridden from the environment.

import os

# Project root: flagstack_app/ lives directly under it.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "flagstack.db")


class Config:
    """
    Configuration for the Flask application.
    """
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_very_secret_key_for_flagstack'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')
    LOG_JSON = os.environ.get('LOG_JSON', '0') == '1'

    # Header set by the upstream identity provider with the authenticated subject
    AUTH_SUBJECT_HEADER = os.environ.get('AUTH_SUBJECT_HEADER', 'X-Auth-Subject')

    # Shared secret the identity provider sends when syncing users
    IDENTITY_SYNC_TOKEN = os.environ.get('IDENTITY_SYNC_TOKEN')

    # Session generation slower than this (milliseconds) is logged as a warning
    PRACTICE_GENERATION_WARN_MS = int(os.environ.get('PRACTICE_GENERATION_WARN_MS', '2000'))

    # Make sure the database directory exists when the app boots
    db_dir = os.path.dirname(DATABASE_PATH)
    os.makedirs(db_dir, exist_ok=True)
