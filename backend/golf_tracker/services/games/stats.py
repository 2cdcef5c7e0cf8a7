from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import case, func

from golf_tracker import db
from golf_tracker.errors import NotFound
from golf_tracker.models import Game, GameParticipant, Player


def _round_half_up(value, places: int) -> float:
    # matches SQL ROUND: halves go away from zero
    return float(Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def win_rate(games_won: int, games_played: int) -> float:
    """Percentage of games won, one decimal place."""
    if not games_played:
        return 0.0
    return _round_half_up(Decimal(games_won) * 100 / Decimal(games_played), 1)


def player_stats(user_id=None) -> list[dict]:
    """Aggregate every player with at least one recorded game.

    Ordered by most wins, then best (lowest) average score.
    """
    games_played = func.count(GameParticipant.id)
    games_won = func.sum(case((GameParticipant.won.is_(True), 1), else_=0))
    avg_score = func.avg(GameParticipant.total_score)
    query = (
        db.session.query(
            Player.id,
            Player.name,
            games_played.label('games_played'),
            games_won.label('games_won'),
            avg_score.label('avg_score'),
            func.min(GameParticipant.total_score).label('best_score'),
            func.max(GameParticipant.total_score).label('worst_score'),
        )
        .join(GameParticipant, GameParticipant.player_id == Player.id)
        .join(Game, GameParticipant.game_id == Game.id)
    )
    if user_id is not None:
        query = query.filter(Game.user_id == user_id)
    query = (
        query.group_by(Player.id, Player.name)
        .having(games_played > 0)
        .order_by(games_won.desc(), avg_score.asc(), Player.name.asc())
    )

    stats = []
    for row in query.all():
        won = int(row.games_won or 0)
        stats.append({
            'id': row.id,
            'name': row.name,
            'games_played': row.games_played,
            'games_won': won,
            'avg_score': _round_half_up(row.avg_score, 2),
            'best_score': row.best_score,
            'worst_score': row.worst_score,
            'win_rate': win_rate(won, row.games_played),
        })
    return stats


def player_history(player_id) -> list[dict]:
    player = db.session.get(Player, player_id)
    if player is None:
        raise NotFound('Player not found')

    player_count = (
        db.session.query(func.count(GameParticipant.id))
        .filter(GameParticipant.game_id == Game.id)
        .correlate(Game)
        .scalar_subquery()
    )
    rows = (
        db.session.query(GameParticipant, Game, player_count.label('player_count'))
        .join(Game, GameParticipant.game_id == Game.id)
        .filter(GameParticipant.player_id == player.id)
        .order_by(Game.created_at.desc(), Game.id.desc())
        .all()
    )
    return [
        {
            'game_id': game.id,
            'date': game.date,
            'created_at': game.created_at.isoformat() if game.created_at else None,
            'total_score': participant.total_score,
            'scores': participant.scores,
            'won': participant.won,
            'player_count': count,
        }
        for participant, game, count in rows
    ]
