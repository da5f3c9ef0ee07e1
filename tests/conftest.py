import threading

import pytest
import redis

from mcapi import create_app
from mcapi.config import Config
from mcapi.services.check_service import perform_check
from mcapi.store import StatusStore


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the store uses.

    Set ``down = True`` to make every command fail like an unreachable server.
    """

    def __init__(self):
        self.values = {}
        self.sets = {}
        self.down = False
        self._lock = threading.Lock()

    def _check(self):
        if self.down:
            raise redis.ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    def get(self, key):
        self._check()
        return self.values.get(key)

    def set(self, key, value):
        self._check()
        with self._lock:
            self.values[key] = str(value)
        return True

    def incr(self, key):
        self._check()
        with self._lock:
            value = int(self.values.get(key, 0)) + 1
            self.values[key] = str(value)
        return value

    def sadd(self, key, *members):
        self._check()
        with self._lock:
            s = self.sets.setdefault(key, set())
            before = len(s)
            s.update(members)
            return len(s) - before

    def srem(self, key, *members):
        self._check()
        with self._lock:
            s = self.sets.setdefault(key, set())
            before = len(s)
            s.difference_update(members)
            return before - len(s)

    def smembers(self, key):
        self._check()
        return set(self.sets.get(key, ()))

    def pipeline(self, transaction=True):
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, client):
        self.client = client
        self.commands = []

    def smembers(self, key):
        self.commands.append(("smembers", key))
        return self

    def execute(self):
        self.client._check()
        with self.client._lock:
            return [set(self.client.sets.get(key, ())) for _, key in self.commands]


class StubAdapter:
    """Adapter returning canned payloads, or raising a canned error."""

    def __init__(self, kind, payload=None, error=None):
        self.KIND = kind
        self.payload = payload if payload is not None else {"motd": "A Minecraft Server"}
        self.error = error
        self.calls = []

    def fetch(self, address):
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return dict(self.payload, address=address)


class RecordingDispatcher:
    def __init__(self):
        self.calls = []

    def submit(self, kind, address):
        self.calls.append((kind, address))

    def shutdown(self):
        pass


class SyncDispatcher:
    """Runs each check inline so tests can observe results right away."""

    def __init__(self, store, adapters):
        self.store = store
        self.adapters = adapters

    def submit(self, kind, address):
        return perform_check(self.store, self.adapters[kind], address)

    def shutdown(self):
        pass


class TestConfig(Config):
    TESTING = True
    SENTRY_DSN = ""
    DISPATCH_BACKEND = "thread"
    CHECK_CONCURRENCY = 4
    CHECK_TIMEOUT = 1.0
    CELERY_BROKER_URL = "memory://"
    CELERY_RESULT_BACKEND = "cache+memory://"
    LOG_FILE = ""


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def store(fake_redis):
    return StatusStore(fake_redis)


@pytest.fixture
def app(store):
    app = create_app(TestConfig, store=store)
    yield app
    app.extensions["mcapi.dispatcher"].shutdown()


@pytest.fixture
def client(app):
    return app.test_client()
