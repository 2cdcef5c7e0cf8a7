import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).lower() in ('1', 'true', 'yes', 'y', 'on')


def _as_list(value, default):
    if not value:
        return list(default)
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///golf-scores.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Google login + per-user scoping of games
    AUTH_ENABLED = _as_bool(os.environ.get('AUTH_ENABLED'))
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.environ.get('GOOGLE_CLIENT_SECRET')
    # Where the browser is sent after the OAuth callback
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:5173')
    CORS_ORIGINS = _as_list(os.environ.get('CORS_ORIGINS'), [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5174",
    ])
    GAMES_LIST_LIMIT = int(os.environ.get('GAMES_LIST_LIMIT', '50'))
    # Session cookie
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_LIFETIME_HOURS', '24')))
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = os.environ.get('FLASK_ENV', os.environ.get('ENV')) == 'production'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
