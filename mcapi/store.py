# mcapi/store.py
# Redis-backed shared state: server registry sets, latest check result per address, request counter

import json

CHECK_KINDS = ("ping", "query")

REGISTRY_KEYS = {
    "ping": "serverping",
    "query": "serverquery",
}
STATS_KEY = "mcapi"


def result_key(kind: str, address: str) -> str:
    return f"{kind}:{address}"


class StatusStore:
    """Single access point for everything the service keeps in Redis.

    Built once at startup around one client (and so one connection pool) and
    handed to the orchestrator, the dispatchers and the request handlers.
    All operations are single Redis commands or one transaction pipeline, so
    no locking is needed in the process. Redis errors are not caught here;
    callers decide how to degrade.
    """

    def __init__(self, redis_client):
        self.redis = redis_client

    # Registry
    def registry_snapshot(self) -> dict[str, list[str]]:
        """Read both registry sets atomically; the result is this cycle's work list."""
        pipe = self.redis.pipeline(transaction=True)
        for kind in CHECK_KINDS:
            pipe.smembers(REGISTRY_KEYS[kind])
        members = pipe.execute()
        return {kind: sorted(m) for kind, m in zip(CHECK_KINDS, members)}

    def add_server(self, kind: str, address: str) -> bool:
        return bool(self.redis.sadd(REGISTRY_KEYS[kind], address))

    def remove_server(self, kind: str, address: str) -> bool:
        return bool(self.redis.srem(REGISTRY_KEYS[kind], address))

    # Check results
    def save_result(self, kind: str, address: str, record: dict) -> None:
        self.redis.set(result_key(kind, address), json.dumps(record))

    def get_result(self, kind: str, address: str) -> dict | None:
        raw = self.redis.get(result_key(kind, address))
        if raw is None:
            return None
        return json.loads(raw)

    # Request counter
    def incr_requests(self) -> int:
        return int(self.redis.incr(STATS_KEY))

    def get_requests(self) -> int:
        raw = self.redis.get(STATS_KEY)
        return int(raw) if raw is not None else 0
