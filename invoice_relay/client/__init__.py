"""
Relay Client.

Async HTTP client used by the invoice form to reach the relay backend.
All requests include X-Frontend-ID: cli header for log routing.
"""

from invoice_relay.client.relay_client import (
    RelayClient,
    UploadPolicy,
    close_relay_client,
    get_relay_client,
)

__all__ = [
    "RelayClient",
    "UploadPolicy",
    "close_relay_client",
    "get_relay_client",
]
