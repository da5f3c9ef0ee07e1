# mcapi/routes/middleware.py
# Request hooks: global request counter, CORS and CDN cache headers on every response

import logging

import redis
from flask import current_app

from ..utils.reporting import report_exception

logger = logging.getLogger(__name__)

RESPONSE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET",
    "Cache-Control": "max-age=300, public, s-maxage=300",
}


def count_request():
    try:
        current_app.extensions["mcapi.store"].incr_requests()
    except redis.RedisError as e:
        # the request is still served, just not counted
        logger.warning("could not increment request counter: %s", e)
        report_exception(e)


def add_response_headers(response):
    response.headers.update(RESPONSE_HEADERS)
    return response


def init_app(app):
    app.before_request(count_request)
    app.after_request(add_response_headers)
