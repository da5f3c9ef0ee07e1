# mcapi/config.py
# Configuration: Redis, HTTP bind address, static/template paths, Sentry, refresh cadence

import json
import os
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = os.path.dirname(__file__)


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""


class Config:
    APP_NAME = "mcapi"

    # HTTP
    HTTP_APP_HOST = os.getenv("HTTP_APP_HOST", ":8080")
    STATIC_FILES = os.getenv("STATIC_FILES", os.path.join(PACKAGE_DIR, "static"))
    TEMPLATE_FILE = os.getenv("TEMPLATE_FILE", os.path.join(PACKAGE_DIR, "templates", "index.html"))

    # Redis
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    REDIS_POOL_SIZE = int(os.getenv("REDIS_POOL_SIZE", "1000"))

    # Sentry; empty DSN disables reporting
    SENTRY_DSN = os.getenv("SENTRY_DSN", "")

    # Refresh cycle
    REFRESH_INTERVAL = int(os.getenv("REFRESH_INTERVAL", "60"))
    CHECK_CONCURRENCY = int(os.getenv("CHECK_CONCURRENCY", "64"))
    CHECK_TIMEOUT = float(os.getenv("CHECK_TIMEOUT", "5"))
    # thread: in-process pool, celery: send checks to workers
    DISPATCH_BACKEND = os.getenv("DISPATCH_BACKEND", "thread")

    # Celery
    CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
    CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", REDIS_URL)
    CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "False") in ("True", "true", "1")

    LOG_FILE = os.getenv("LOG_FILE", "mcapi.log")


# JSON config file key -> (Flask config key, expected type)
FILE_KEYS = {
    "HttpAppHost": ("HTTP_APP_HOST", str),
    "RedisHost": ("REDIS_URL", str),
    "StaticFiles": ("STATIC_FILES", str),
    "TemplateFile": ("TEMPLATE_FILE", str),
    "SentryDSN": ("SENTRY_DSN", str),
    "RefreshInterval": ("REFRESH_INTERVAL", float),
    "CheckConcurrency": ("CHECK_CONCURRENCY", int),
    "CheckTimeout": ("CHECK_TIMEOUT", float),
    "DispatchBackend": ("DISPATCH_BACKEND", str),
}

DISPATCH_BACKENDS = ("thread", "celery")

DEFAULT_FILE_CONFIG = {
    "HttpAppHost": ":8080",
    "RedisHost": ":6379",
    "StaticFiles": "./scripts",
    "TemplateFile": "./templates/index.html",
    "SentryDSN": "",
}


def redis_url_from_host(host: str) -> str:
    """Turn a ``host:port`` (host may be empty) into a redis:// URL."""
    if "://" in host:
        return host
    hostname, sep, port = host.rpartition(":")
    if not sep:
        hostname, port = host, "6379"
    return f"redis://{hostname or 'localhost'}:{port or '6379'}/0"


def parse_bind_address(value: str) -> tuple[str, int]:
    host, sep, port = value.rpartition(":")
    if not sep:
        raise ConfigError(f"invalid bind address {value!r}")
    try:
        return host or "0.0.0.0", int(port)
    except ValueError:
        raise ConfigError(f"invalid port in bind address {value!r}") from None


def _coerce(file_key: str, value, kind):
    """Coerce one config file value to ``kind``; numbers must be positive."""
    if kind is str:
        if not isinstance(value, str):
            raise ConfigError(f"{file_key} must be a string, got {value!r}")
        return value
    if isinstance(value, bool):
        raise ConfigError(f"{file_key} must be a number, got {value!r}")
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{file_key} must be a number, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"{file_key} must be positive, got {value!r}")
    return number


def load_config(path: str) -> dict:
    """Read a JSON config file and return the matching Flask config keys."""
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot load config file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {path} must contain a JSON object")

    base = os.path.dirname(os.path.abspath(path))
    out = {}
    for file_key, (config_key, kind) in FILE_KEYS.items():
        if file_key not in raw:
            continue
        value = _coerce(file_key, raw[file_key], kind)
        if config_key == "HTTP_APP_HOST":
            parse_bind_address(value)
        elif config_key == "DISPATCH_BACKEND" and value not in DISPATCH_BACKENDS:
            raise ConfigError(f"DispatchBackend must be one of {DISPATCH_BACKENDS}, got {value!r}")
        elif config_key == "REDIS_URL":
            value = redis_url_from_host(value)
        elif config_key in ("STATIC_FILES", "TEMPLATE_FILE"):
            value = os.path.normpath(os.path.join(base, value))
        out[config_key] = value
    if "REDIS_URL" in out:
        out["CELERY_BROKER_URL"] = out["REDIS_URL"]
        out["CELERY_RESULT_BACKEND"] = out["REDIS_URL"]
    return out


def generate_config(path: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(DEFAULT_FILE_CONFIG, fh, indent="\t")
        fh.write("\n")
