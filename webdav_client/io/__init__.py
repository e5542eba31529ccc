"""
I/O layer for the WebDAV protocol.

This module provides sync and async implementations for executing
DAVRequest objects and returning DAVResponse objects.

The I/O layer is intentionally thin - it only handles HTTP transport.
All protocol logic (XML building/parsing) is in webdav_client.protocol.

Example (sync):
    from webdav_client.protocol import WebDAVProtocol
    from webdav_client.io import SyncIO

    protocol = WebDAVProtocol(base_url="https://dav.example.com")
    with SyncIO() as io:
        request = protocol.propfind_request("/files/")
        response = io.execute(request)
        result = protocol.parse_propfind(response)

Example (async):
    from webdav_client.protocol import WebDAVProtocol
    from webdav_client.io import AsyncIO

    protocol = WebDAVProtocol(base_url="https://dav.example.com")
    async with AsyncIO() as io:
        request = protocol.propfind_request("/files/")
        response = await io.execute(request)
        result = protocol.parse_propfind(response)
"""

from .base import AsyncIOProtocol, SyncIOProtocol
from .sync import SyncIO
from .async_ import AsyncIO

__all__ = [
    # Protocols
    "SyncIOProtocol",
    "AsyncIOProtocol",
    # Implementations
    "SyncIO",
    "AsyncIO",
]
