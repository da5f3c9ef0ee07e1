# mcapi/adapters/ping_adapter.py
# Server List Ping via mcstatus, mapped into the payload served by /server/status.

from .base import lookup_server


def flatten_description(description) -> str:
    # description is either a plain string or a chat component tree
    if isinstance(description, str):
        return description
    if isinstance(description, list):
        return "".join(flatten_description(d) for d in description)
    if isinstance(description, dict):
        text = description.get("text", "")
        return text + "".join(flatten_description(d) for d in description.get("extra", []))
    return ""


def parse_status(status: dict) -> dict:
    """Map a raw status response (the server's JSON) to the API payload."""
    players = status.get("players") or {}
    version = status.get("version") or {}
    return {
        "motd": flatten_description(status.get("description", "")),
        "players": {
            "max": players.get("max", 0),
            "now": players.get("online", 0),
            "sample": [p.get("name", "") for p in players.get("sample") or []],
        },
        "server": {
            "name": version.get("name", ""),
            "protocol": version.get("protocol", 0),
        },
        "favicon": status.get("favicon", ""),
    }


class PingAdapter:
    KIND = "ping"

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    def fetch(self, address: str) -> dict:
        status = lookup_server(address, self.timeout).status()
        payload = parse_status(status.raw)
        payload["latency"] = round(status.latency, 2)
        return payload
