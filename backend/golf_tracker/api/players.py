from flask import Blueprint, jsonify

from golf_tracker.auth import auth_enabled, current_owner_id, session_required
from golf_tracker.errors import NotFound
from golf_tracker.services.games import player_history, player_stats

players = Blueprint('players', __name__)


@players.route('/stats', methods=['GET'])
@session_required
def get_player_stats():
    return jsonify(player_stats(user_id=current_owner_id()))


@players.route('/<int:player_id>/history', methods=['GET'])
def get_player_history(player_id):
    # Histories span every user's games, so they only exist without login
    if auth_enabled():
        raise NotFound()
    return jsonify(player_history(player_id))
