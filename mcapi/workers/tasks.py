"""Celery tasks for running checks on worker processes.

With ``DISPATCH_BACKEND=celery`` the web process keeps the refresh scheduler
and only queues ``check_server_task`` messages; workers started from
``mcapi.worker`` execute them against the same Redis store. The application
calls ``_bootstrap_tasks(app)`` when it is created; the plain functions are
exposed as well so they can be called without a broker.
"""

import logging

from flask import current_app

from ..adapters import build_adapters
from ..services.check_service import perform_check

logger = logging.getLogger(__name__)


def _store():
    return current_app.extensions["mcapi.store"]


def run_check_task(kind: str, address: str):
    adapter = build_adapters(current_app.config["CHECK_TIMEOUT"])[kind]
    record = perform_check(_store(), adapter, address)
    return {"address": address, "kind": kind, "status": record["status"]}


def _bootstrap_tasks(app):
    """Register Celery tasks on the Flask app's Celery instance.

    app: Flask application created by create_app()
    """
    celery = getattr(app, "celery_app", None)
    if celery is None:
        return

    @celery.task(name="check_server_task")
    def _celery_check_server(kind: str, address: str):
        return run_check_task(kind, address)
