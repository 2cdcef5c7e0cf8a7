import os
import sys
import pytest

# Ensure the backend root (containing the `golf_tracker` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from flask import g
from flask.testing import FlaskClient

from golf_tracker import create_app, db


class SessionClient(FlaskClient):
    """Test client that reloads the logged-in user on every request.

    The fixtures keep one app context pushed for the whole test, and
    Flask-Login caches the user on ``g``, so without this two clients with
    different sessions would see the same user.
    """

    def open(self, *args, **kwargs):
        g.pop('_login_user', None)
        return super().open(*args, **kwargs)


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTH_ENABLED = False
    FRONTEND_URL = 'http://localhost:5173'
    CORS_ORIGINS = ['http://localhost:5173']
    GAMES_LIST_LIMIT = 50
    LOG_LEVEL = 'DEBUG'


class AuthTestConfig(TestConfig):
    AUTH_ENABLED = True
    GOOGLE_CLIENT_ID = 'test-client-id'
    GOOGLE_CLIENT_SECRET = 'test-client-secret'


def _build(config_class):
    application = create_app(config_class)
    application.test_client_class = SessionClient
    with application.app_context():
        # Ensure models are imported so tables are created
        import golf_tracker.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _build(TestConfig)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def auth_app():
    yield from _build(AuthTestConfig)


@pytest.fixture()
def auth_client(auth_app):
    return auth_app.test_client()
