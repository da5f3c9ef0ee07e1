# mcapi/routes/api.py
# Read-only API: cached server status/query results and the request counter

import logging
import time

import redis
from flask import Blueprint, request, jsonify, current_app

from ..utils.reporting import report_exception

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _store():
    return current_app.extensions["mcapi.store"]


def requested_address():
    ip = (request.args.get("ip") or "").strip()
    if not ip:
        return None
    port = (request.args.get("port") or "").strip()
    return f"{ip}:{port}" if port else ip


def unknown_result(kind: str, address: str) -> dict:
    return {
        "address": address,
        "kind": kind,
        "status": "unknown",
        "online": False,
        "error": "server has not been checked yet",
    }


def respond_cached(kind: str):
    """Serve the last stored result for the requested address; never checks live."""
    address = requested_address()
    if address is None:
        return jsonify({"status": "error", "error": "missing ip parameter"}), 400

    try:
        record = _store().get_result(kind, address)
    except (redis.RedisError, ValueError) as e:
        logger.warning("could not read %s result for %s: %s", kind, address, e)
        report_exception(e)
        record = None

    if record is None:
        return jsonify(unknown_result(kind, address))
    return jsonify(record)


@api_bp.get("/hi")
def hi():
    return "Hello :3", 200, {"Content-Type": "text/plain; charset=utf-8"}


@api_bp.get("/stats")
def stats():
    try:
        count = _store().get_requests()
    except (redis.RedisError, ValueError) as e:
        logger.warning("could not read request counter: %s", e)
        report_exception(e)
        count = 0
    return jsonify({"stats": count, "time": time.time_ns()})


@api_bp.get("/server/status")
@api_bp.get("/minecraft/1.3/server/status")
def server_status():
    return respond_cached("ping")


@api_bp.get("/server/query")
@api_bp.get("/minecraft/1.3/server/query")
def server_query():
    return respond_cached("query")
