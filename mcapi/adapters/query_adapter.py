# mcapi/adapters/query_adapter.py
# GameSpy4 query via mcstatus, mapped into the payload served by /server/query.

from .base import lookup_server


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_query(values: dict, players: list) -> dict:
    """Map the query key/value section and player list to the API payload."""
    return {
        "motd": values.get("hostname", ""),
        "game_type": values.get("gametype", ""),
        "game_id": values.get("game_id", ""),
        "version": values.get("version", ""),
        "plugins": values.get("plugins", ""),
        "map": values.get("map", ""),
        "players": {
            "max": _to_int(values.get("maxplayers")),
            "now": _to_int(values.get("numplayers")),
            "list": list(players),
        },
        "host_ip": values.get("hostip", ""),
        "host_port": _to_int(values.get("hostport")),
    }


class QueryAdapter:
    KIND = "query"

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    def fetch(self, address: str) -> dict:
        response = lookup_server(address, self.timeout).query()
        return parse_query(response.raw, response.players.list)
