from functools import wraps

from authlib.integrations.base_client import OAuthError
from flask import Blueprint, current_app, jsonify, redirect, session, url_for
from flask_login import current_user, login_user, logout_user

from golf_tracker.errors import Unauthorized, ValidationError
from golf_tracker.services.identity import profile_from_userinfo, upsert_user

auth = Blueprint('auth', __name__)


def auth_enabled():
    return bool(current_app.config.get('AUTH_ENABLED'))


def session_required(view):
    """Reject the request with 401 when login is on and there is no session."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if auth_enabled() and not current_user.is_authenticated:
            raise Unauthorized()
        return view(*args, **kwargs)
    return wrapper


def current_owner_id():
    """Id scoping game queries: the session user with login on, else None."""
    if not auth_enabled():
        return None
    if not current_user.is_authenticated:
        raise Unauthorized()
    return current_user.id


def google_client():
    """The Google OAuth client registered on the current app."""
    return current_app.extensions['oauth'].google


def _fetch_provider_profile():
    google = google_client()
    token = google.authorize_access_token()
    return token.get('userinfo') or google.userinfo(token=token)


@auth.route('/google', methods=['GET', 'POST'])
def google_login():
    redirect_uri = url_for('auth.google_callback', _external=True)
    return google_client().authorize_redirect(redirect_uri)


@auth.route('/google/callback')
def google_callback():
    frontend_url = current_app.config['FRONTEND_URL']
    try:
        profile = profile_from_userinfo(_fetch_provider_profile())
    except (OAuthError, ValidationError) as exc:
        current_app.logger.warning(f"[auth] google callback failed: {exc}")
        return redirect(frontend_url)

    user = upsert_user(profile)
    session.permanent = True
    login_user(user)
    current_app.logger.info(f"[auth] login user={user.id}")
    return redirect(frontend_url)


@auth.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        current_app.logger.info(f"[auth] logout user={current_user.id}")
    logout_user()
    return jsonify({'success': True})


@auth.route('/user', methods=['GET'])
def get_user():
    if current_user.is_authenticated:
        return jsonify({'user': current_user.to_dict()})
    return jsonify({'user': None}), 401
