"""Application factory"""
import os
import logging

from flask import Flask

from laxstats.models import db
from laxstats.constants import MAX_PERIODS
from laxstats.exceptions import ConfigurationError

__version__ = '0.1.0'


def create_app(config_name='default', **overrides):
    app = Flask(__name__)

    # Load configuration
    from laxstats.config import config
    if config_name not in config:
        raise ConfigurationError(f"Unknown configuration: {config_name}", "config_name")
    app.config.from_object(config[config_name])
    app.config.update(overrides)

    if app.config['PERIOD_FORMAT'] not in MAX_PERIODS:
        raise ConfigurationError(f"Invalid period format: {app.config['PERIOD_FORMAT']}", "PERIOD_FORMAT")

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if app.debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    db.init_app(app)

    # Register Blueprints
    from laxstats.routes import api_bp, register_error_handlers
    app.register_blueprint(api_bp)
    register_error_handlers(app)

    def _init_db_tables():
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and ':memory:' not in uri:
            db_dir = os.path.dirname(uri.replace('sqlite:///', ''))
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir)
                app.logger.info(f"Created database directory: {db_dir}")
        db.create_all()

    # --- CLI commands for DB ---
    @app.cli.command("init-db")
    def init_db_command():
        """Initializes the database tables."""
        with app.app_context():
            _init_db_tables()
        print("Initialized the database tables.")

    with app.app_context():
        _init_db_tables()
        app.logger.info("Database tables created/verified")

    return app
