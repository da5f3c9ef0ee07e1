# manage.py
# Flask CLI for the server registry: flask --app manage servers add|remove|list
# Reads MCAPI_CONFIG (default config.json) when the file exists.

import os

import click
from flask.cli import AppGroup

from mcapi import create_app
from mcapi.store import CHECK_KINDS

_config_file = os.getenv("MCAPI_CONFIG", "config.json")
app = create_app(config_file=_config_file if os.path.exists(_config_file) else None)

servers_cli = AppGroup("servers", help="Manage the monitored server registry.")
kind_arg = click.argument("kind", type=click.Choice(CHECK_KINDS))


@servers_cli.command("add")
@kind_arg
@click.argument("address")
def add_server(kind, address):
    store = app.extensions["mcapi.store"]
    added = store.add_server(kind, address)
    click.echo(f"{'added' if added else 'already present'}: {kind} {address}")


@servers_cli.command("remove")
@kind_arg
@click.argument("address")
def remove_server(kind, address):
    store = app.extensions["mcapi.store"]
    removed = store.remove_server(kind, address)
    click.echo(f"{'removed' if removed else 'not present'}: {kind} {address}")


@servers_cli.command("list")
def list_servers():
    snapshot = app.extensions["mcapi.store"].registry_snapshot()
    for kind in CHECK_KINDS:
        for address in snapshot[kind]:
            click.echo(f"{kind}\t{address}")


app.cli.add_command(servers_cli)


@app.shell_context_processor
def make_context():
    return {
        "store": app.extensions["mcapi.store"],
        "orchestrator": app.extensions["mcapi.orchestrator"],
    }
