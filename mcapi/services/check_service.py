import logging
import time

from ..adapters.base import Adapter, CheckResult
from ..store import StatusStore
from ..utils.reporting import report_exception
from .errors import fatal_pattern

logger = logging.getLogger(__name__)


def _previous_last_online(store: StatusStore, kind: str, address: str) -> int:
    prev = store.get_result(kind, address)
    if not prev:
        return 0
    return int(prev.get("last_online") or 0)


def perform_check(store: StatusStore, adapter: Adapter, address: str) -> CheckResult:
    """Run one adapter against ``address`` and store the outcome.

    Adapter failures never propagate: they are classified and written as an
    error record. Store failures do propagate to the caller.
    """
    kind = adapter.KIND
    started = time.perf_counter_ns()
    try:
        data = adapter.fetch(address)
        error = None
    except Exception as e:
        data = {}
        error = e
    duration = time.perf_counter_ns() - started
    now = int(time.time())

    if error is None:
        record: CheckResult = {
            "address": address,
            "kind": kind,
            "status": "success",
            "online": True,
            "data": data,
            "error": "",
            "fatal": False,
            "last_updated": now,
            "last_online": now,
            "duration": duration,
        }
    else:
        pattern = fatal_pattern(error)
        if pattern:
            # permanent: bad address or unroutable, not worth an alert
            logger.info("%s %s failed permanently (%s): %s", kind, address, pattern, error)
        elif isinstance(error, OSError):
            # timeouts, refused/reset connections: retried on the next cycle
            logger.warning("%s %s failed: %s", kind, address, error)
        else:
            logger.error("%s %s failed unexpectedly: %r", kind, address, error)
            report_exception(error)
        record = {
            "address": address,
            "kind": kind,
            "status": "error",
            "online": False,
            "data": {},
            "error": str(error) or type(error).__name__,
            "fatal": pattern is not None,
            "last_updated": now,
            "last_online": _previous_last_online(store, kind, address),
            "duration": duration,
        }

    store.save_result(kind, address, record)
    return record
