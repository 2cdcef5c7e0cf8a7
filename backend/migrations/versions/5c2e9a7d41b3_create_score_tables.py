"""create users, players, games and game_participants

Revision ID: 5c2e9a7d41b3
Revises:
Create Date: 2025-09-14 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a7d41b3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('google_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('picture', sa.String(length=1024), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('ix_users_google_id', 'users', ['google_id'], unique=True)

    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        sa.Column('date', sa.String(length=64), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('ix_games_user_id', 'games', ['user_id'])
    op.create_index('ix_games_created_at', 'games', ['created_at'])

    round_columns = [
        sa.Column(f'round_{i}', sa.Integer(), nullable=False) for i in range(1, 10)
    ]
    op.create_table(
        'game_participants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_id', sa.Integer(), sa.ForeignKey('games.id', ondelete='CASCADE'), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False),
        sa.Column('total_score', sa.Integer(), nullable=False),
        *round_columns,
        sa.Column('won', sa.Boolean(), nullable=False),
        sa.UniqueConstraint('game_id', 'player_id', name='uq_game_participant'),
    )
    op.create_index('ix_game_participants_game_id', 'game_participants', ['game_id'])
    op.create_index('ix_game_participants_player_id', 'game_participants', ['player_id'])


def downgrade():
    op.drop_index('ix_game_participants_player_id', table_name='game_participants')
    op.drop_index('ix_game_participants_game_id', table_name='game_participants')
    op.drop_table('game_participants')
    op.drop_index('ix_games_created_at', table_name='games')
    op.drop_index('ix_games_user_id', table_name='games')
    op.drop_table('games')
    op.drop_table('players')
    op.drop_index('ix_users_google_id', table_name='users')
    op.drop_table('users')
