"""Check dispatchers: hand one (kind, address) check off without waiting for it.

Two backends share the ``submit(kind, address)`` call used by the refresh
orchestrator:

* ``ThreadPoolDispatcher`` runs checks in this process on a bounded thread
  pool. At most ``max_workers`` checks run at once; the rest wait in the
  executor queue.
* ``CeleryDispatcher`` sends each check to the Celery workers as a
  ``check_server_task``; the worker pool size bounds concurrency.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from ..adapters import build_adapters
from ..adapters.base import Adapter
from ..config import ConfigError
from ..services.check_service import perform_check
from ..utils.reporting import report_exception

logger = logging.getLogger(__name__)


class ThreadPoolDispatcher:
    def __init__(self, store, adapters: dict[str, Adapter], max_workers: int = 64):
        self.store = store
        self.adapters = adapters
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="mcapi-check")

    def submit(self, kind: str, address: str):
        future = self._executor.submit(perform_check, self.store, self.adapters[kind], address)
        future.add_done_callback(lambda f: self._done(f, kind, address))
        return future

    def _done(self, future, kind, address):
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("%s check for %s could not be stored: %s", kind, address, exc)
            report_exception(exc)

    def shutdown(self):
        # in-flight checks are abandoned, not awaited
        self._executor.shutdown(wait=False, cancel_futures=True)


class CeleryDispatcher:
    TASK_NAME = "check_server_task"

    def __init__(self, celery_app):
        self.celery_app = celery_app

    def submit(self, kind: str, address: str):
        try:
            return self.celery_app.send_task(self.TASK_NAME, args=(kind, address))
        except Exception as e:
            # broker unreachable: this check is skipped until the next cycle
            logger.error("could not queue %s check for %s: %s", kind, address, e)
            report_exception(e)
            return None

    def shutdown(self):
        pass


def make_dispatcher(app, store):
    backend = app.config["DISPATCH_BACKEND"]
    if backend == "celery":
        return CeleryDispatcher(app.celery_app)
    if backend == "thread":
        return ThreadPoolDispatcher(
            store,
            build_adapters(app.config["CHECK_TIMEOUT"]),
            max_workers=app.config["CHECK_CONCURRENCY"],
        )
    raise ConfigError(f"unknown DISPATCH_BACKEND {backend!r}")
