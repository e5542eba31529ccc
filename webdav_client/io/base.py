"""
The dispatcher interface: what the client needs from an HTTP transport.

Anything with an ``execute(DAVRequest) -> DAVResponse`` method and a
``close()`` qualifies, which is how tests plug in a canned transport.
"""

from typing import Protocol, runtime_checkable

from webdav_client.protocol.types import DAVRequest, DAVResponse


@runtime_checkable
class SyncIOProtocol(Protocol):
    """
    Blocking dispatcher.  Transport failures (connection refused,
    timeouts) propagate as the exceptions of the underlying library;
    HTTP error statuses do not raise, they come back in the DAVResponse.
    """

    def execute(self, request: DAVRequest) -> DAVResponse:
        """Send request and return status, reason, headers and body."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class AsyncIOProtocol(Protocol):
    """
    Awaitable dispatcher.  Cancelling the awaiting task cancels the
    request in flight.
    """

    async def execute(self, request: DAVRequest) -> DAVResponse:
        """Send request and return status, reason, headers and body."""
        ...

    async def close(self) -> None:
        ...
