import pytest

import golf_tracker.auth as auth_module
from golf_tracker.models import Game, GameParticipant, Player, User
from conftest import AuthTestConfig
from golf_tracker import create_app
from helpers import ANN, BO, game_payload, login_as, make_user

GOOGLE_USERINFO = {
    'sub': '1234567890',
    'email': 'ann@example.com',
    'name': 'Ann Example',
    'picture': 'https://example.com/ann.png',
}


@pytest.mark.parametrize('method,path', [
    ('get', '/api/games'),
    ('post', '/api/games'),
    ('get', '/api/games/1'),
    ('delete', '/api/games/1'),
    ('get', '/api/players/stats'),
])
def test_protected_endpoints_require_session(auth_client, method, path):
    kwargs = {'json': game_payload(ANN, BO)} if method == 'post' else {}
    res = getattr(auth_client, method)(path, **kwargs)
    assert res.status_code == 401
    assert res.get_json() == {'error': 'Not authenticated'}
    assert Game.query.count() == 0
    assert Player.query.count() == 0


def test_health_is_public(auth_client):
    assert auth_client.get('/api/health').status_code == 200


def test_current_user_anonymous(auth_client):
    res = auth_client.get('/auth/user')
    assert res.status_code == 401
    assert res.get_json() == {'user': None}


def test_current_user_after_login(auth_client, auth_app):
    user = make_user()
    login_as(auth_client, user)
    res = auth_client.get('/auth/user')
    assert res.status_code == 200
    assert res.get_json()['user']['email'] == 'ann@example.com'


def test_logout_ends_session(auth_client, auth_app):
    login_as(auth_client, make_user())
    res = auth_client.post('/auth/logout')
    assert res.get_json() == {'success': True}
    assert auth_client.get('/auth/user').status_code == 401
    assert auth_client.get('/api/games').status_code == 401


def test_games_are_scoped_to_owner(auth_client, auth_app):
    ann = make_user('google-ann', 'ann@example.com', 'Ann')
    bo = make_user('google-bo', 'bo@example.com', 'Bo')

    login_as(auth_client, ann)
    game_id = auth_client.post('/api/games', json=game_payload(ANN, BO)).get_json()['gameId']
    assert Game.query.filter_by(id=game_id).one().user_id == ann.id
    assert len(auth_client.get('/api/games').get_json()) == 1
    assert len(auth_client.get('/api/players/stats').get_json()) == 2

    other = auth_app.test_client()
    login_as(other, bo)
    assert other.get('/api/games').get_json() == []
    assert other.get('/api/players/stats').get_json() == []
    assert other.get(f'/api/games/{game_id}').status_code == 404
    # not the owner: nothing is deleted
    assert other.delete(f'/api/games/{game_id}').status_code == 404
    assert GameParticipant.query.filter_by(game_id=game_id).count() == 2

    assert auth_client.delete(f'/api/games/{game_id}').status_code == 200
    assert Game.query.count() == 0


def test_player_history_is_unavailable_with_login(auth_client, auth_app):
    login_as(auth_client, make_user())
    auth_client.post('/api/games', json=game_payload(ANN))
    player_id = Player.query.filter_by(name='Ann').one().id
    assert auth_client.get(f'/api/players/{player_id}/history').status_code == 404


def test_google_login_redirects_to_provider(auth_client, monkeypatch):
    captured = {}

    def fake_authorize_redirect(redirect_uri):
        captured['redirect_uri'] = redirect_uri
        return auth_module.redirect('https://accounts.google.com/o/oauth2/v2/auth')

    monkeypatch.setattr(auth_module.google_client(), 'authorize_redirect', fake_authorize_redirect)
    res = auth_client.get('/auth/google')
    assert res.status_code == 302
    assert res.headers['Location'].startswith('https://accounts.google.com/')
    assert captured['redirect_uri'].endswith('/auth/google/callback')


def test_google_callback_creates_user_once(auth_client, auth_app, monkeypatch):
    monkeypatch.setattr(auth_module, '_fetch_provider_profile', lambda: dict(GOOGLE_USERINFO))

    res = auth_client.get('/auth/google/callback')
    assert res.status_code == 302
    assert res.headers['Location'] == 'http://localhost:5173'
    me = auth_client.get('/auth/user').get_json()['user']
    assert me['google_id'] == '1234567890'
    assert me['name'] == 'Ann Example'

    auth_client.post('/auth/logout')
    changed = dict(GOOGLE_USERINFO, name='Renamed')
    monkeypatch.setattr(auth_module, '_fetch_provider_profile', lambda: changed)
    auth_client.get('/auth/google/callback')
    assert User.query.count() == 1
    # existing rows are reused unchanged
    assert User.query.one().name == 'Ann Example'
    assert auth_client.get('/auth/user').get_json()['user']['id'] == me['id']


def test_google_callback_failure_leaves_anonymous(auth_client, monkeypatch):
    def fail():
        raise auth_module.OAuthError(error='access_denied')

    monkeypatch.setattr(auth_module, '_fetch_provider_profile', fail)
    res = auth_client.get('/auth/google/callback')
    assert res.status_code == 302
    assert User.query.count() == 0
    assert auth_client.get('/auth/user').status_code == 401


def test_each_app_registers_its_own_google_client(auth_app):
    assert auth_module.google_client().client_id == 'test-client-id'

    class RotatedConfig(AuthTestConfig):
        GOOGLE_CLIENT_ID = 'rotated-client-id'
        GOOGLE_CLIENT_SECRET = 'rotated-client-secret'

    rotated = create_app(RotatedConfig)
    with rotated.app_context():
        assert auth_module.google_client().client_id == 'rotated-client-id'
        assert auth_module.google_client().client_secret == 'rotated-client-secret'
    assert auth_module.google_client().client_id == 'test-client-id'
