from conftest import StubAdapter, SyncDispatcher
from mcapi.workers.orchestrator import RefreshOrchestrator


def _record(address, motd="hello"):
    return {
        "address": address,
        "kind": "ping",
        "status": "success",
        "online": True,
        "data": {"motd": motd},
        "error": "",
        "fatal": False,
        "last_updated": 1700000000,
        "last_online": 1700000000,
        "duration": 1234,
    }


def test_unchecked_address_is_unknown(client):
    resp = client.get("/server/status?ip=never.checked.example")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "unknown"
    assert body["address"] == "never.checked.example"
    assert body["online"] is False


def test_query_unknown_is_distinct_from_failed_check(client, store):
    store.save_result("query", "down.example", dict(_record("down.example"), kind="query", status="error", online=False))
    failed = client.get("/server/query?ip=down.example").get_json()
    unknown = client.get("/server/query?ip=other.example").get_json()
    assert failed["status"] == "error"
    assert unknown["status"] == "unknown"


def test_status_returns_cached_record_verbatim(client, store):
    record = _record("play.example.com")
    store.save_result("ping", "play.example.com", record)
    resp = client.get("/server/status?ip=play.example.com")
    assert resp.status_code == 200
    assert resp.get_json() == record


def test_versioned_aliases_serve_same_data(client, store):
    store.save_result("ping", "a.example", _record("a.example", motd="ping"))
    store.save_result("query", "a.example", dict(_record("a.example", motd="query"), kind="query"))
    assert client.get("/minecraft/1.3/server/status?ip=a.example").get_json() == \
        client.get("/server/status?ip=a.example").get_json()
    assert client.get("/minecraft/1.3/server/query?ip=a.example").get_json()["data"]["motd"] == "query"


def test_port_parameter_is_part_of_address(client, store):
    store.save_result("ping", "a.example:25566", _record("a.example:25566"))
    assert client.get("/server/status?ip=a.example&port=25566").get_json()["status"] == "success"
    assert client.get("/server/status?ip=a.example").get_json()["status"] == "unknown"


def test_missing_ip_is_client_error(client):
    resp = client.get("/server/status")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "missing ip parameter"


def test_stats_increase_by_one_per_request(client):
    values = [client.get("/stats").get_json()["stats"] for _ in range(3)]
    assert values == [1, 2, 3]


def test_stats_time_is_nanoseconds(client):
    body = client.get("/stats").get_json()
    assert body["time"] > 10**18


def test_every_request_is_counted(client, fake_redis):
    client.get("/hi")
    client.get("/server/status?ip=x")
    client.get("/server/status")
    client.get("/does-not-exist")
    assert fake_redis.values["mcapi"] == "4"


def test_hi(client):
    resp = client.get("/hi")
    assert resp.status_code == 200
    assert resp.data == b"Hello :3"
    assert resp.mimetype == "text/plain"


def test_cors_and_cache_headers(client):
    for path in ("/hi", "/stats", "/server/status?ip=x", "/"):
        resp = client.get(path)
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert resp.headers["Access-Control-Allow-Methods"] == "GET"
        assert resp.headers["Cache-Control"] == "max-age=300, public, s-maxage=300"


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Minecraft Server Status API" in resp.data


def test_static_scripts(client):
    resp = client.get("/scripts/mcapi.js")
    assert resp.status_code == 200
    assert b"MCAPI" in resp.data
    resp.close()


def test_store_down_degrades_without_errors(client, fake_redis, monkeypatch):
    reported = []
    monkeypatch.setattr("mcapi.routes.middleware.report_exception", reported.append)
    monkeypatch.setattr("mcapi.routes.api.report_exception", reported.append)
    fake_redis.down = True

    assert client.get("/hi").status_code == 200
    resp = client.get("/server/status?ip=play.example.com")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "unknown"
    resp = client.get("/stats")
    assert resp.status_code == 200
    assert resp.get_json()["stats"] == 0
    # three failed increments plus two failed reads
    assert len(reported) == 5


def test_ping_only_server_end_to_end(client, store, fake_redis):
    fake_redis.sadd("serverping", "play.example.com")
    adapters = {
        "ping": StubAdapter("ping", payload={"motd": "Welcome"}),
        "query": StubAdapter("query"),
    }
    counts = RefreshOrchestrator(store, SyncDispatcher(store, adapters)).refresh_all()

    assert counts == {"ping": 1, "query": 0}
    assert adapters["query"].calls == []

    status = client.get("/server/status?ip=play.example.com").get_json()
    assert status["status"] == "success"
    assert status["data"]["motd"] == "Welcome"
    query = client.get("/server/query?ip=play.example.com").get_json()
    assert query["status"] == "unknown"


def test_no_profiling_routes(app, client):
    assert client.get("/debug/pprof/").status_code == 404
    assert not [r.rule for r in app.url_map.iter_rules() if "pprof" in r.rule]
