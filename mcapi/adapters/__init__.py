from .base import Adapter
from .ping_adapter import PingAdapter
from .query_adapter import QueryAdapter


def build_adapters(timeout: float) -> dict[str, Adapter]:
    """One adapter per check kind, keyed by kind."""
    return {
        PingAdapter.KIND: PingAdapter(timeout=timeout),
        QueryAdapter.KIND: QueryAdapter(timeout=timeout),
    }
