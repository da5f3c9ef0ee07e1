# mcapi/__init__.py
# Flask app factory: config, shared Redis store, request hooks, blueprints, refresh scheduler.

import os

from flask import Flask, Config as FlaskConfig

from .config import Config, load_config
from .extensions import make_redis, make_celery
from .routes import middleware
from .routes.api import api_bp
from .routes.web import web_bp
from .store import StatusStore
from .utils.logging import configure_logging
from .utils.reporting import init_error_reporting
from .workers.dispatcher import make_dispatcher
from .workers.orchestrator import RefreshOrchestrator, RefreshScheduler


def create_app(config_object=Config, config_file: str | None = None, store: StatusStore | None = None) -> Flask:
    """Build the application.

    The refresh scheduler is created but not started; ``mcapi.cli`` starts it
    when serving. Pass ``store`` to run against an already built store.
    """
    settings = FlaskConfig(os.path.dirname(__file__))
    settings.from_object(config_object)
    if config_file:
        settings.update(load_config(config_file))

    app = Flask(
        __name__,
        static_folder=settings["STATIC_FILES"],
        static_url_path="/scripts",
        template_folder=os.path.dirname(settings["TEMPLATE_FILE"]),
    )
    app.config.update(settings)
    configure_logging(app.config["LOG_FILE"])

    if app.config["SENTRY_DSN"]:
        init_error_reporting(app.config["SENTRY_DSN"])

    if store is None:
        store = StatusStore(make_redis(app))
    app.extensions["mcapi.store"] = store

    middleware.init_app(app)
    app.register_blueprint(web_bp)
    app.register_blueprint(api_bp)

    app.celery_app = make_celery(app)
    from .workers import tasks
    tasks._bootstrap_tasks(app)

    dispatcher = make_dispatcher(app, store)
    orchestrator = RefreshOrchestrator(store, dispatcher)
    app.extensions["mcapi.dispatcher"] = dispatcher
    app.extensions["mcapi.orchestrator"] = orchestrator
    app.extensions["mcapi.scheduler"] = RefreshScheduler(orchestrator, app.config["REFRESH_INTERVAL"])

    return app
