"""HTTP utilities package.

Exposes pooled httpx clients and the blocking transport used by the request
engine.
"""

from .client import close_all_clients, get_httpx_client
from .transport import JSON_HEADERS, HttpxTransport, Transport

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "Transport",
    "HttpxTransport",
    "JSON_HEADERS",
]
