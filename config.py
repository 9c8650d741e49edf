import os
from dotenv import load_dotenv

load_dotenv()


def _default_db_uri() -> str:
    # Prefer PyMySQL driver for Windows compatibility
    user = os.environ.get('MYSQL_USER', 'root')
    password = os.environ.get('MYSQL_PASSWORD', 'root')
    host = os.environ.get('MYSQL_HOST', '127.0.0.1')
    port = os.environ.get('MYSQL_PORT', '3306')
    db = os.environ.get('MYSQL_DB', 'schooldesk')
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{db}"


def _default_identity():
    # The auth collaborator normally sends X-User-* headers; this is the
    # identity used when it doesn't. DEFAULT_USER_ROLE=none disables it.
    role = os.environ.get('DEFAULT_USER_ROLE', 'admin').lower()
    if role in ('', 'none'):
        return None
    return {'id': os.environ.get('DEFAULT_USER_ID', '1'), 'role': role, 'name': 'Demo User'}


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'your-secret-key'
    # Use DATABASE_URL if present; else build a sensible default using PyMySQL
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or _default_db_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    DEFAULT_CLASS_CAPACITY = int(os.environ.get('DEFAULT_CLASS_CAPACITY', 45))
    DEFAULT_IDENTITY = _default_identity()

    SEARCH_LIMIT_STUDENTS = 10
    SEARCH_LIMIT_REPORTS = 20
    SEARCH_LIMIT_RESULTS = 20
    RECENT_ANNOUNCEMENTS = 3


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_LEVEL = 'DEBUG'
    DEFAULT_IDENTITY = {'id': '1', 'role': 'admin', 'name': 'Test Admin'}
