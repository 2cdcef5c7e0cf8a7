from golf_tracker import db
from flask_login import UserMixin
from sqlalchemy import func

ROUNDS = 9


def _timestamp(value):
    return value.isoformat() if value else None


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    google_id = db.Column(db.String(255), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=True)
    picture = db.Column(db.String(1024), nullable=True)
    created_at = db.Column(db.DateTime, server_default=func.now())
    games = db.relationship('Game', back_populates='user', cascade='all, delete-orphan', passive_deletes=True)

    def to_dict(self):
        return {
            'id': self.id,
            'google_id': self.google_id,
            'email': self.email,
            'name': self.name,
            'picture': self.picture,
            'created_at': _timestamp(self.created_at),
        }


class Player(db.Model):
    __tablename__ = 'players'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, server_default=func.now())
    participations = db.relationship(
        'GameParticipant', back_populates='player', cascade='all, delete-orphan', passive_deletes=True
    )


class Game(db.Model):
    __tablename__ = 'games'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True)
    date = db.Column(db.String(64), nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, server_default=func.now(), index=True)
    user = db.relationship('User', back_populates='games')
    participants = db.relationship(
        'GameParticipant', back_populates='game', cascade='all, delete-orphan', passive_deletes=True
    )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'date': self.date,
            'completed': self.completed,
            'created_at': _timestamp(self.created_at),
        }


class GameParticipant(db.Model):
    __tablename__ = 'game_participants'
    __table_args__ = (db.UniqueConstraint('game_id', 'player_id', name='uq_game_participant'),)
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('games.id', ondelete='CASCADE'), nullable=False, index=True)
    player_id = db.Column(db.Integer, db.ForeignKey('players.id', ondelete='CASCADE'), nullable=False, index=True)
    total_score = db.Column(db.Integer, nullable=False)
    round_1 = db.Column(db.Integer, default=0, nullable=False)
    round_2 = db.Column(db.Integer, default=0, nullable=False)
    round_3 = db.Column(db.Integer, default=0, nullable=False)
    round_4 = db.Column(db.Integer, default=0, nullable=False)
    round_5 = db.Column(db.Integer, default=0, nullable=False)
    round_6 = db.Column(db.Integer, default=0, nullable=False)
    round_7 = db.Column(db.Integer, default=0, nullable=False)
    round_8 = db.Column(db.Integer, default=0, nullable=False)
    round_9 = db.Column(db.Integer, default=0, nullable=False)
    won = db.Column(db.Boolean, default=False, nullable=False)
    game = db.relationship('Game', back_populates='participants')
    player = db.relationship('Player', back_populates='participations')

    @property
    def scores(self):
        return [getattr(self, f'round_{i}') for i in range(1, ROUNDS + 1)]

    @scores.setter
    def scores(self, values):
        for i, value in enumerate(values[:ROUNDS], start=1):
            setattr(self, f'round_{i}', value)

    def to_dict(self):
        data = {
            'id': self.id,
            'game_id': self.game_id,
            'player_id': self.player_id,
            'total_score': self.total_score,
        }
        for i, value in enumerate(self.scores, start=1):
            data[f'round_{i}'] = value
        data['scores'] = self.scores
        data['won'] = self.won
        data['player_name'] = self.player.name if self.player else None
        return data
