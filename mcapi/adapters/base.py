# mcapi/adapters/base.py
# Adapter interface: fetch(address) -> payload, failures are raised as exceptions

from typing import Protocol, TypedDict, Any, runtime_checkable

from mcstatus import JavaServer

DEFAULT_PORT = 25565


class CheckResult(TypedDict, total=False):
    address: str
    kind: str          # ping/query
    status: str        # success/error
    online: bool
    data: dict
    error: str
    fatal: bool
    last_updated: int
    last_online: int
    duration: int      # nanoseconds


@runtime_checkable
class Adapter(Protocol):
    KIND: str

    def fetch(self, address: str) -> dict[str, Any]: ...


def split_address(address: str, default_port: int | None = DEFAULT_PORT) -> tuple[str, int | None]:
    """Split ``host[:port]`` into host and port.

    With ``default_port=None`` an address without a port yields ``None``, so
    the caller can fall back to an SRV lookup.

    Malformed addresses raise ValueError with texts that the fatal error
    classification recognises, so a bad registry entry is never retried as
    if it were a timeout.
    """
    address = address.strip()
    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep:
            raise ValueError(f"address {address}: missing ']' in address")
        port = rest[1:] if rest.startswith(":") else ""
        if rest and not rest.startswith(":"):
            raise ValueError(f"address {address}: invalid argument")
    elif address.count(":") > 1:
        raise ValueError(f"address {address}: too many colons in address")
    else:
        host, _, port = address.partition(":")

    if not host:
        raise ValueError(f"address {address}: invalid argument")
    if not port:
        return host, default_port
    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"address {address}: unknown port")
    return host, int(port)


def lookup_server(address: str, timeout: float) -> JavaServer:
    host, port = split_address(address, default_port=None)
    if port is None and ":" not in host:
        # no explicit port: honour the server's _minecraft._tcp SRV record
        return JavaServer.lookup(host, timeout=timeout)
    return JavaServer(host, port or DEFAULT_PORT, timeout=timeout)
