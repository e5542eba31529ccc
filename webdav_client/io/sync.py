"""
Synchronous I/O implementation using the requests library.
"""

from typing import Optional

import requests
from requests.auth import AuthBase

from webdav_client.protocol.types import DAVRequest, DAVResponse


class SyncIO:
    """
    Synchronous I/O shell using the requests library.

    This is a thin wrapper that executes DAVRequest objects via HTTP
    and returns DAVResponse objects.

    Example:
        io = SyncIO()
        request = protocol.propfind_request("/files/")
        response = io.execute(request)
        result = protocol.parse_propfind(response)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30.0,
        verify: bool = True,
        auth: Optional[AuthBase] = None,
        headers: Optional[dict] = None,
    ):
        """
        Initialize the sync I/O handler.

        Args:
            session: Existing requests Session to use (creates new if None)
            timeout: Request timeout in seconds, None to wait forever
            verify: Verify SSL certificates
            auth: requests authentication handler (digest, bearer, ...)
            headers: Headers sent with every request
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify
        if auth is not None:
            self.session.auth = auth
        if headers:
            self.session.headers.update(headers)

    def execute(self, request: DAVRequest) -> DAVResponse:
        """
        Execute a DAVRequest and return DAVResponse.

        Args:
            request: The request to execute

        Returns:
            DAVResponse with status, headers, and body
        """
        response = self.session.request(
            method=request.method.value,
            url=request.url,
            headers=request.headers,
            data=request.body,
            timeout=self.timeout,
            verify=self.verify,
        )

        return DAVResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            reason=response.reason or "",
        )

    def close(self) -> None:
        """Close the session if we created it."""
        if self._owns_session and self.session:
            self.session.close()

    def __enter__(self) -> "SyncIO":
        """Context manager entry."""
        return self

    def __exit__(self, *args) -> None:
        """Context manager exit."""
        self.close()
