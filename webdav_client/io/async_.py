"""
Asynchronous I/O implementation using aiohttp library.
"""

from typing import Dict, Optional

import aiohttp

from webdav_client.protocol.types import DAVRequest, DAVResponse


def _merge_headers(headers) -> Dict[str, str]:
    """
    Flatten a multidict of headers.  Repeated headers, like several DAV
    lines, are joined with commas.
    """
    ret: Dict[str, str] = {}
    lowered: Dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in lowered:
            first = lowered[key.lower()]
            ret[first] = f"{ret[first]}, {value}"
        else:
            lowered[key.lower()] = key
            ret[key] = value
    return ret


class AsyncIO:
    """
    Asynchronous I/O shell using aiohttp library.

    This is a thin wrapper that executes DAVRequest objects via HTTP
    and returns DAVResponse objects.

    Example:
        async with AsyncIO() as io:
            request = protocol.propfind_request("/files/")
            response = await io.execute(request)
            result = protocol.parse_propfind(response)
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = 30.0,
        verify_ssl: bool = True,
        auth: Optional[aiohttp.BasicAuth] = None,
        headers: Optional[dict] = None,
    ):
        """
        Initialize the async I/O handler.

        Args:
            session: Existing aiohttp ClientSession to use (creates new if None)
            timeout: Request timeout in seconds, None to wait forever
            verify_ssl: Verify SSL certificates
            auth: Basic authentication for every request
            headers: Headers sent with every request
        """
        self._session = session
        self._owns_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.verify_ssl = verify_ssl
        self.auth = auth
        self.headers = dict(headers or {})

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None:
            connector = aiohttp.TCPConnector(ssl=self.verify_ssl)
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=connector,
                auth=self.auth,
                headers=self.headers,
            )
        return self._session

    async def execute(self, request: DAVRequest) -> DAVResponse:
        """
        Execute a DAVRequest and return DAVResponse.

        Args:
            request: The request to execute

        Returns:
            DAVResponse with status, headers, and body
        """
        session = await self._get_session()

        async with session.request(
            method=request.method.value,
            url=request.url,
            headers=request.headers,
            data=request.body,
        ) as response:
            body = await response.read()
            return DAVResponse(
                status=response.status,
                headers=_merge_headers(response.headers),
                body=body,
                reason=response.reason or "",
            )

    async def close(self) -> None:
        """Close the session if we created it."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncIO":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args) -> None:
        """Async context manager exit."""
        await self.close()
