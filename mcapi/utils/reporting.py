# mcapi/utils/reporting.py
# Sentry error reporting: init once at startup, capture from anywhere

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration


def init_error_reporting(dsn: str, environment: str = "production") -> None:
    # an empty DSN leaves the client disabled; capture calls become no-ops
    sentry_sdk.init(
        dsn=dsn or None,
        environment=environment,
        integrations=[FlaskIntegration()],
    )


def report_exception(exc: BaseException | None = None) -> None:
    sentry_sdk.capture_exception(exc)


def flush(timeout: float = 2.0) -> None:
    """Block until queued events are sent; used before exiting on fatal errors."""
    sentry_sdk.flush(timeout=timeout)
