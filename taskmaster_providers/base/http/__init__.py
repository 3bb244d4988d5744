"""HTTP utilities package for providers.

Exposes pooled httpx clients.
"""

from .client import get_httpx_client, close_all_clients

__all__ = ["get_httpx_client", "close_all_clients"]
