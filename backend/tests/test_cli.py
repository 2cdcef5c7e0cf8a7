import os

import sqlalchemy as sa
from flask_migrate import upgrade

from golf_tracker import create_app, db
from golf_tracker.models import Game, Player

from conftest import TestConfig

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), '..', 'migrations')


def test_db_reset_with_seed(flask_app):
    db.session.add(Player(name='Leftover'))
    db.session.commit()

    result = flask_app.test_cli_runner().invoke(args=['db-reset', '--seed'])
    assert result.exit_code == 0, result.output
    assert 'Seeded sample game #1' in result.output
    assert Game.query.count() == 1
    assert sorted(p.name for p in Player.query.all()) == ['Ann', 'Bo']


def test_db_reset_without_seed(flask_app):
    result = flask_app.test_cli_runner().invoke(args=['db-reset'])
    assert result.exit_code == 0, result.output
    assert Game.query.count() == 0


def test_migrations_create_schema(tmp_path):
    class MigrationConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'golf.db'}"

    application = create_app(MigrationConfig)
    with application.app_context():
        upgrade(directory=MIGRATIONS_DIR)
        tables = set(sa.inspect(db.engine).get_table_names())
        db.engine.dispose()
    assert {'users', 'players', 'games', 'game_participants'} <= tables
