"""Refresh a single server against a real Redis and print what the API serves.

usage: python smoke_run.py play.example.com [ping|query]
"""

import sys
import time

from mcapi import create_app

address = sys.argv[1] if len(sys.argv) > 1 else "localhost"
kind = sys.argv[2] if len(sys.argv) > 2 else "ping"

app = create_app()
store = app.extensions["mcapi.store"]
store.add_server(kind, address)

counts = app.extensions["mcapi.orchestrator"].refresh_all()
print('dispatched:', counts)

client = app.test_client()
path = '/server/status' if kind == 'ping' else '/server/query'
for _ in range(20):
    body = client.get(path, query_string={'ip': address}).get_json()
    if body['status'] != 'unknown':
        break
    time.sleep(0.5)

print(path, 'status:', body['status'])
for k in ('online', 'error', 'fatal', 'last_online', 'duration'):
    print('   ', k, ':', body.get(k))
if body.get('data'):
    print('data keys:', list(body['data'].keys()))
print('stats:', client.get('/stats').get_json())

app.extensions["mcapi.dispatcher"].shutdown()
