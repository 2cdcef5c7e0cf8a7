"""Game-record services: saving finished games and reading them back.

Routes stay thin and call into these functions; everything here works on
the request-scoped ``db.session`` and raises the errors from
``golf_tracker.errors``.
"""
from .records import save_game, list_games, get_game, delete_game
from .stats import player_stats, player_history, win_rate

__all__ = [
    'save_game',
    'list_games',
    'get_game',
    'delete_game',
    'player_stats',
    'player_history',
    'win_rate',
]
