from datetime import datetime, timezone

from flask import current_app
from sqlalchemy import func, select

from golf_tracker import db
from golf_tracker.errors import NotFound, ValidationError
from golf_tracker.models import ROUNDS, Game, GameParticipant, Player
from golf_tracker.services.upsert import get_or_create


def _as_score(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_player(entry) -> dict:
    """Coerce one submitted player into ``{name, scores, total}``.

    Rounds are padded/truncated to 9 and non-numeric rounds count as 0. The
    submitted ``totalScore`` is trusted; the sum of rounds is only a fallback
    for submissions that leave it out.
    """
    if not isinstance(entry, dict):
        raise ValidationError('Each player must be an object')
    name = str(entry.get('name') or '').strip()
    if not name:
        raise ValidationError('Player name is required')
    raw_scores = entry.get('scores') or []
    if not isinstance(raw_scores, list):
        raise ValidationError('Player scores must be a list')
    scores = [_as_score(v) for v in raw_scores[:ROUNDS]]
    scores += [0] * (ROUNDS - len(scores))
    total = entry.get('totalScore')
    total = sum(scores) if total is None else _as_score(total)
    return {'name': name, 'scores': scores, 'total': total}


def save_game(players, date=None, user_id=None) -> int:
    """Persist a finished game and its participants in one transaction.

    Every participant whose total equals the game minimum is marked as a
    winner. Nothing is committed if any step fails.
    """
    if not isinstance(players, list) or not players:
        raise ValidationError('No players provided')
    entries = [normalize_player(p) for p in players]
    names = [e['name'] for e in entries]
    if len(set(names)) != len(names):
        raise ValidationError('Player names must be unique within a game')
    min_score = min(e['total'] for e in entries)

    try:
        game = Game(
            user_id=user_id,
            date=date or datetime.now(timezone.utc).isoformat(),
            completed=True,
        )
        db.session.add(game)
        for entry in entries:
            player, created = get_or_create(Player, {'name': entry['name']})
            if created:
                current_app.logger.info(f"[save_game] new player id={player.id} name={player.name!r}")
            participant = GameParticipant(
                game=game,
                player=player,
                total_score=entry['total'],
                won=entry['total'] == min_score,
            )
            participant.scores = entry['scores']
            db.session.add(participant)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    winners = [e['name'] for e in entries if e['total'] == min_score]
    current_app.logger.info(
        f"[save_game] game={game.id} user={user_id} players={len(entries)} winners={winners} score={min_score}"
    )
    return game.id


def list_games(user_id=None, limit=50) -> list[dict]:
    winner_name = (
        select(Player.name)
        .join(GameParticipant, GameParticipant.player_id == Player.id)
        .where(GameParticipant.game_id == Game.id, GameParticipant.won.is_(True))
        .order_by(GameParticipant.id)
        .limit(1)
        .correlate(Game)
        .scalar_subquery()
    )
    query = (
        db.session.query(
            Game.id,
            Game.date,
            Game.created_at,
            func.count(GameParticipant.id).label('player_count'),
            func.min(GameParticipant.total_score).label('winning_score'),
            winner_name.label('winner_name'),
        )
        .outerjoin(GameParticipant, GameParticipant.game_id == Game.id)
    )
    if user_id is not None:
        query = query.filter(Game.user_id == user_id)
    query = (
        query.group_by(Game.id, Game.date, Game.created_at)
        .order_by(Game.created_at.desc(), Game.id.desc())
        .limit(limit)
    )
    return [
        {
            'id': row.id,
            'date': row.date,
            'created_at': row.created_at.isoformat() if row.created_at else None,
            'player_count': row.player_count,
            'winning_score': row.winning_score,
            'winner_name': row.winner_name,
        }
        for row in query.all()
    ]


def _find_game(game_id, user_id=None) -> Game:
    query = Game.query.filter_by(id=game_id)
    if user_id is not None:
        query = query.filter_by(user_id=user_id)
    game = query.first()
    if game is None:
        raise NotFound('Game not found')
    return game


def get_game(game_id, user_id=None) -> dict:
    game = _find_game(game_id, user_id)
    participants = (
        GameParticipant.query.filter_by(game_id=game.id)
        .order_by(GameParticipant.total_score.asc(), GameParticipant.id.asc())
        .all()
    )
    payload = game.to_dict()
    payload['participants'] = [p.to_dict() for p in participants]
    return payload


def delete_game(game_id, user_id=None) -> None:
    game = _find_game(game_id, user_id)
    try:
        db.session.delete(game)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"[delete_game] game={game_id} user={user_id}")
