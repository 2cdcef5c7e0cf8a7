"""HTTP client for the score-tracker REST API and the views built on it."""
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from golf_tracker.scorecard import SaveFailed, SaveSucceeded, Scorecard, reduce, save_payload


class TrackerApiError(Exception):
    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class GolfTrackerClient:
    """Thin wrapper over the REST endpoints.

    ``session`` keeps the login cookie between calls; pass an authenticated
    ``requests.Session`` when talking to a server with login enabled.
    """

    def __init__(self, base_url='http://localhost:3001', session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, json=None):
        try:
            resp = self.session.request(method, f'{self.base_url}{path}', json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TrackerApiError(None, f'Network error: {exc}') from exc
        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = None
            message = body.get('error') if isinstance(body, dict) else None
            raise TrackerApiError(resp.status_code, message or f'Request failed ({resp.status_code})')
        try:
            return resp.json()
        except ValueError as exc:
            raise TrackerApiError(resp.status_code, 'Invalid response from server') from exc

    def health(self):
        return self._request('GET', '/api/health')

    def save_game(self, payload) -> int:
        body = self._request('POST', '/api/games', json=payload)
        if not isinstance(body, dict) or 'gameId' not in body:
            raise TrackerApiError(200, 'Invalid response from server')
        return body['gameId']

    def list_games(self):
        return self._request('GET', '/api/games')

    def get_game(self, game_id):
        return self._request('GET', f'/api/games/{game_id}')

    def delete_game(self, game_id):
        return self._request('DELETE', f'/api/games/{game_id}')

    def player_stats(self):
        return self._request('GET', '/api/players/stats')

    def player_history(self, player_id):
        return self._request('GET', f'/api/players/{player_id}/history')

    def current_user(self):
        try:
            return self._request('GET', '/auth/user')['user']
        except TrackerApiError as exc:
            if exc.status_code == 401:
                return None
            raise

    def logout(self):
        return self._request('POST', '/auth/logout')


def save_scorecard(card: Scorecard, client: GolfTrackerClient, date=None) -> Scorecard:
    """Save the card and return it with a success or error banner."""
    if not card.players:
        return reduce(card, SaveFailed(message='No players to save!'))
    try:
        game_id = client.save_game(save_payload(card, date=date))
    except TrackerApiError as exc:
        return reduce(card, SaveFailed(message=exc.message))
    return reduce(card, SaveSucceeded(game_id=game_id))


@dataclass(frozen=True)
class RemoteView:
    """What a history or stats view renders: the data, or an error with a Retry button."""

    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


def load_view(fetch: Callable[[], Any]) -> RemoteView:
    """Run one fetch for a view. Retrying is calling this again."""
    try:
        return RemoteView(data=fetch())
    except TrackerApiError as exc:
        return RemoteView(error=exc.message)
