import importlib
import pkgutil
from typing import Any, Mapping, Optional

from flask import Blueprint, Flask
from flask_cors import CORS

from config.database import MongoConnection, build_mongo_uri
from config.settings import load_settings
from middleware.errors import BaseAppError
from repositories.country_repository import CountryRepository
from services.country_service import CountryService


def _connect_repository(app: Flask) -> CountryRepository:
    """Open the shared Mongo client and return the countries repository."""
    connection = MongoConnection(
        uri=app.config.get("MONGODB_URI") or build_mongo_uri(),
        db_name=app.config["DB_NAME"],
        timeout_ms=app.config["MONGO_TIMEOUT_MS"],
    )
    app.extensions["mongo_connection"] = connection
    try:
        connection.ping()
        app.logger.info("Connected to MongoDB database %s", app.config["DB_NAME"])
    except BaseAppError as exc:
        # Keep serving; requests will surface store errors individually.
        app.logger.error("%s: %s", exc.message, exc.details.get("reason"))
    return CountryRepository.from_connection(connection, app.config["COUNTRIES_COLLECTION"])


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    repository: Optional[CountryRepository] = None,
) -> Flask:
    """Flask application factory."""
    app = Flask(__name__)
    app.config.update(load_settings())
    if config:
        app.config.update(config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    """Registration of error handlers."""
    from middleware.handlers import register_error_handlers
    register_error_handlers(app)

    CORS(app, origins=app.config["CORS_ORIGINS"])

    if repository is None:
        repository = _connect_repository(app)

    if app.config["DB_BOOTSTRAP_INDEXES"]:
        try:
            repository.ensure_indexes()
        except BaseAppError as exc:
            app.logger.error("Index bootstrap failed: %s", exc.details.get("reason", exc.message))

    app.extensions["country_service"] = CountryService(repository, app.logger)

    # Auto-register all blueprints defined in routes/*.py
    from routes import __path__ as routes_path

    for _, module_name, _ in pkgutil.iter_modules(routes_path):
        module = importlib.import_module(f"routes.{module_name}")
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, Blueprint):
                app.register_blueprint(obj)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=app.config["DEBUG"],
        use_reloader=False,
    )
