"""
Plant Watering Tracker
Flask application factory.

Serves the single-page plant form/table (Jinja2 template + static assets)
and the REST API for plant records via registered TrackerService instances.

Usage:
    python app.py                 # Development server on the configured address/port
    flask --app app run           # Same, via Flask CLI
    flask --app app init-db       # Create the database schema
"""

import logging

import click
from flask import Flask, render_template
from flask_cors import CORS

from tracker import __version__
from tracker.config import Settings
from tracker.database import init_db
from tracker.services import ServiceRegistry
from tracker.services.plants import PlantService

log = logging.getLogger(__name__)


def create_registry(settings):
    """Build and populate the service registry."""
    registry = ServiceRegistry()
    registry.register(PlantService(settings.database_path))
    return registry


def create_app(settings=None):
    """
    Application factory for the plant tracker.

    Parameters
    ----------
    settings : tracker.config.Settings, optional
        Defaults to Settings() resolved from environment and config.toml.
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(settings.log_level.upper())

    app = Flask(
        __name__,
        static_folder="static",
        template_folder="templates",
    )
    app.config.from_mapping(settings.as_flask_config())
    app.extensions["tracker_settings"] = settings

    init_db(settings.database_path)

    # Make app version available to all templates
    @app.context_processor
    def inject_version():
        return {"version": __version__}

    registry = create_registry(settings)

    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origin}},
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Single page: plant form + plant table
    @app.route("/")
    def index():
        return render_template("index.html")

    @app.cli.command("init-db")
    def init_db_command():
        """Create the plants table if it does not exist."""
        init_db(settings.database_path)
        click.echo("Initialized database at {}".format(settings.database_path))

    log.debug("Plant tracker app created (database %s)", settings.database_path)
    return app


if __name__ == "__main__":
    settings = Settings()
    app = create_app(settings)
    app.run(debug=True, host=settings.bind_address, port=settings.bind_port)
