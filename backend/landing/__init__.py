from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from landing.main import main
    flask_app.register_blueprint(main)

    from landing.api.memory import memory
    flask_app.register_blueprint(memory, url_prefix='/api/memory')

    from landing.api.contact import contact
    flask_app.register_blueprint(contact, url_prefix='/api/contact')

    # One memory game per process, shared by HTTP routes and socket handlers
    from landing.services.memory.controller import MemoryGameController
    flask_app.extensions['memory_game'] = MemoryGameController(flask_app, socketio)

    # Register Socket.IO event handlers
    try:
        from landing.socketio_events import register_socketio_handlers
        register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    except ImportError as exc:
        flask_app.logger.warning(f"SocketIO events not loaded: {exc}")

    @click.command('scores-reset')
    def scores_reset_command():
        """Creates missing tables and empties the best-score ledger."""
        from landing.services.memory.ledger import BestScoreLedger
        with flask_app.app_context():
            db.create_all()
            BestScoreLedger().clear()
            print('Best scores have been reset!')

    flask_app.cli.add_command(scores_reset_command)

    return flask_app
