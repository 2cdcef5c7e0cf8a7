from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from authlib.integrations.flask_client import OAuth
from sqlalchemy import event
from sqlalchemy.engine import Engine
import sqlite3
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

GOOGLE_METADATA_URL = 'https://accounts.google.com/.well-known/openid-configuration'


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless enforcement is on for the connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config['CORS_ORIGINS'])

    from golf_tracker.errors import register_error_handlers
    register_error_handlers(flask_app)

    auth_enabled = bool(flask_app.config.get('AUTH_ENABLED'))
    if auth_enabled:
        # one registry per app so each app's client reads its own credentials
        oauth = OAuth(flask_app)
        oauth.register(
            name='google',
            server_metadata_url=GOOGLE_METADATA_URL,
            client_kwargs={'scope': 'openid email profile'},
        )
        flask_app.extensions['oauth'] = oauth
        from golf_tracker.auth import auth
        flask_app.register_blueprint(auth, url_prefix='/auth')

    from golf_tracker.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from golf_tracker.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    @flask_app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    # Flask-Login user loader
    from golf_tracker.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @click.command('db-reset')
    @click.option('--seed', is_flag=True, help='Save a sample game after recreating the tables.')
    def db_reset_command(seed):
        """Drops and recreates the database, optionally with a sample game."""
        from golf_tracker.services.games import save_game
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            if seed:
                game_id = save_game([
                    {'name': 'Ann', 'scores': [1, 2, 3, 4, 5, 6, 7, 8, 9], 'totalScore': 45},
                    {'name': 'Bo', 'scores': [0, 0, 0, 0, 0, 0, 0, 0, 0], 'totalScore': 0},
                ])
                click.echo(f'Seeded sample game #{game_id}')
            click.echo('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
