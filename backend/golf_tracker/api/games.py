from flask import Blueprint, current_app, jsonify, request

from golf_tracker.auth import current_owner_id, session_required
from golf_tracker.services.games import delete_game, get_game, list_games, save_game

games = Blueprint('games', __name__)


@games.route('', methods=['POST'])
@session_required
def create_game():
    """Save a completed game: ``{players: [{name, scores, totalScore}], date?}``."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    game_id = save_game(
        data.get('players'),
        date=data.get('date'),
        user_id=current_owner_id(),
    )
    return jsonify({'success': True, 'gameId': game_id})


@games.route('', methods=['GET'])
@session_required
def get_games():
    limit = int(current_app.config.get('GAMES_LIST_LIMIT', 50))
    return jsonify(list_games(user_id=current_owner_id(), limit=limit))


@games.route('/<int:game_id>', methods=['GET'])
@session_required
def get_game_detail(game_id):
    return jsonify(get_game(game_id, user_id=current_owner_id()))


@games.route('/<int:game_id>', methods=['DELETE'])
@session_required
def remove_game(game_id):
    delete_game(game_id, user_id=current_owner_id())
    return jsonify({'success': True})
