"""
WebDAV protocol operations combining request building and response parsing.

This class provides a high-level interface to WebDAV operations while
remaining completely I/O-free.
"""

import base64
import re
from typing import Dict, Optional, Union
from urllib.parse import urljoin, urlparse

from webdav_client.lib import error

from . import headers as dav_headers
from .params import (
    CopyParameters,
    DeleteParameters,
    LockParameters,
    MkCalendarParameters,
    MkColExtendedParameters,
    MkColParameters,
    MoveParameters,
    PropfindParameters,
    ProppatchParameters,
    PutFileParameters,
    ReportParameters,
    UnlockParameters,
)
from .types import (
    ApplyTo,
    DAVMethod,
    DAVRequest,
    DAVResponse,
    FileResponse,
    LockResponse,
    MkCalendarResponse,
    MkColExtendedResponse,
    OptionsResponse,
    PropfindResponse,
    ProppatchResponse,
    ReportResponse,
    WebDAVResponse,
)
from .xml_builders import (
    build_lock_body,
    build_mkcalendar_body,
    build_mkcol_body,
    build_propfind_body,
    build_proppatch_body,
    build_report_body,
)
from .xml_parsers import (
    parse_lock_response,
    parse_mkcalendar_response,
    parse_mkcol_extended_response,
    parse_propfind_response,
    parse_proppatch_response,
    parse_report_response,
)

_charset_re = re.compile(r"charset\s*=\s*\"?([^\";\s]+)", re.IGNORECASE)


def _required(value, name: str):
    if value is None:
        raise ValueError(f"{name} is required")
    return value


class WebDAVProtocol:
    """
    Sans-I/O WebDAV protocol handler.

    Builds requests and parses responses without doing any I/O.
    All HTTP communication is delegated to an external I/O implementation.

    Example:
        protocol = WebDAVProtocol(base_url="https://dav.example.com/")

        # Build request
        request = protocol.propfind_request("/files/", PropfindParameters())

        # Execute with your I/O (not shown)
        response = io.execute(request)

        # Parse response
        result = protocol.parse_propfind(response)
    """

    content_type = "text/xml; charset=utf-8"

    def __init__(
        self,
        base_url: str = "",
        username: Optional[str] = None,
        password: Optional[str] = None,
        huge_tree: bool = False,
    ):
        """
        Initialize the protocol handler.

        Args:
            base_url: Base URL relative paths are resolved against
            username: Username for Basic authentication
            password: Password for Basic authentication
            huge_tree: Allow parsing very large XML documents
        """
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.username = username
        self.password = password
        self.huge_tree = huge_tree
        self._auth_header = self._build_auth_header(username, password)

    def _build_auth_header(
        self,
        username: Optional[str],
        password: Optional[str],
    ) -> Optional[str]:
        """Build Basic auth header if credentials provided."""
        if username and password:
            credentials = f"{username}:{password}"
            encoded = base64.b64encode(credentials.encode()).decode()
            return f"Basic {encoded}"
        return None

    def _base_headers(self, with_body: bool = False) -> Dict[str, str]:
        """Return base headers for all requests."""
        headers = {}
        if with_body:
            headers["Content-Type"] = self.content_type
        if self._auth_header:
            headers["Authorization"] = self._auth_header
        return headers

    def _resolve_url(self, path: Optional[str]) -> str:
        """
        Resolve a path to a full URL.

        Args:
            path: Relative path or absolute URL.  An empty path means
                the base URL.

        Returns:
            Full URL
        """
        if path is None:
            raise ValueError("a request URL is required")

        if not path:
            if not self.base_url:
                raise ValueError("empty request URL and no base URL set")
            return self.base_url

        # Already a full URL
        parsed = urlparse(path)
        if parsed.scheme:
            return path

        # Relative path - join with base
        if self.base_url:
            # Ensure base_url ends with / for proper joining
            base = self.base_url
            if not base.endswith("/"):
                base += "/"
            return urljoin(base, path.lstrip("/"))

        return path

    def _xml_request(
        self,
        method: DAVMethod,
        path: str,
        body: str,
        headers: Optional[Dict[str, Optional[str]]] = None,
    ) -> DAVRequest:
        all_headers = self._base_headers(with_body=True)
        for name, value in (headers or {}).items():
            if value is not None:
                all_headers[name] = value
        return DAVRequest(
            method=method,
            url=self._resolve_url(path),
            headers=all_headers,
            body=body.encode("utf-8"),
        )

    def _plain_request(
        self,
        method: DAVMethod,
        path: str,
        headers: Optional[Dict[str, Optional[str]]] = None,
    ) -> DAVRequest:
        all_headers = self._base_headers()
        for name, value in (headers or {}).items():
            if value is not None:
                all_headers[name] = value
        return DAVRequest(
            method=method,
            url=self._resolve_url(path),
            headers=all_headers,
        )

    # =========================================================================
    # Request builders
    # =========================================================================

    def propfind_request(
        self,
        path: str,
        parameters: Optional[PropfindParameters] = None,
    ) -> DAVRequest:
        """
        Build a PROPFIND request.

        Args:
            path: Resource path or URL
            parameters: Properties to retrieve and depth; all properties
                of the resource and its children if None

        Returns:
            DAVRequest ready for execution
        """
        if parameters is None:
            parameters = PropfindParameters()
        apply_to = parameters.apply_to or ApplyTo.Propfind.RESOURCE_AND_CHILDREN
        body = build_propfind_body(
            parameters.standard_properties,
            parameters.custom_properties,
            parameters.namespaces,
        )
        return self._xml_request(
            DAVMethod.PROPFIND,
            path,
            body,
            {"Depth": dav_headers.depth_for_propfind(apply_to)},
        )

    def proppatch_request(
        self,
        path: str,
        parameters: ProppatchParameters,
    ) -> DAVRequest:
        """
        Build a PROPPATCH request to set and remove properties.
        """
        _required(parameters, "parameters")
        body = build_proppatch_body(
            parameters.properties_to_set,
            parameters.properties_to_remove,
            parameters.namespaces,
        )
        return self._xml_request(
            DAVMethod.PROPPATCH,
            path,
            body,
            {"If": dav_headers.if_header(parameters.lock_token)},
        )

    def mkcalendar_request(
        self,
        path: str,
        parameters: MkCalendarParameters,
    ) -> DAVRequest:
        """
        Build a MKCALENDAR request.

        Args:
            path: Path of the calendar collection to create
            parameters: Properties of the new calendar

        Returns:
            DAVRequest ready for execution
        """
        _required(parameters, "parameters")
        body = build_mkcalendar_body(
            parameters.properties_to_set, parameters.namespaces
        )
        return self._xml_request(
            DAVMethod.MKCALENDAR,
            path,
            body,
            {"If": dav_headers.if_header(parameters.lock_token)},
        )

    def mkcol_request(
        self,
        path: str,
        parameters: Optional[MkColParameters] = None,
    ) -> DAVRequest:
        """
        Build a plain MKCOL request, without a body.
        """
        if parameters is None:
            parameters = MkColParameters()
        return self._plain_request(
            DAVMethod.MKCOL,
            path,
            {"If": dav_headers.if_header(parameters.lock_token)},
        )

    def mkcol_extended_request(
        self,
        path: str,
        parameters: MkColExtendedParameters,
    ) -> DAVRequest:
        """
        Build an extended MKCOL request (RFC 5689) setting properties of
        the new collection.
        """
        _required(parameters, "parameters")
        body = build_mkcol_body(parameters.properties_to_set, parameters.namespaces)
        return self._xml_request(
            DAVMethod.MKCOL,
            path,
            body,
            {"If": dav_headers.if_header(parameters.lock_token)},
        )

    def report_request(
        self,
        path: str,
        parameters: ReportParameters,
    ) -> DAVRequest:
        """
        Build a multiget REPORT request.

        Raises:
            ReportError: if the parameters are of an unsupported report kind
        """
        _required(parameters, "parameters")
        body = build_report_body(parameters)
        if body is None:
            raise error.ReportError(
                url=path,
                reason=f"unsupported report parameters {type(parameters).__name__}",
            )
        return self._xml_request(DAVMethod.REPORT, path, body)

    def get_file_request(self, path: str, translate: bool = False) -> DAVRequest:
        """
        Build a GET request.

        Args:
            path: Resource path or URL
            translate: Ask the server for the processed (rendered) file
                instead of its source
        """
        return self._plain_request(
            DAVMethod.GET,
            path,
            {"Translate": dav_headers.translate_header(translate)},
        )

    def put_file_request(
        self,
        path: str,
        content: Union[bytes, str],
        parameters: Optional[PutFileParameters] = None,
    ) -> DAVRequest:
        """
        Build a PUT request uploading content.
        """
        _required(content, "content")
        if parameters is None:
            parameters = PutFileParameters()
        if isinstance(content, str):
            content = content.encode("utf-8")
        request = self._plain_request(
            DAVMethod.PUT,
            path,
            {
                "Content-Type": parameters.content_type,
                "If": dav_headers.if_header(parameters.lock_token),
            },
        )
        return request.with_body(content)

    def delete_request(
        self,
        path: str,
        parameters: Optional[DeleteParameters] = None,
    ) -> DAVRequest:
        if parameters is None:
            parameters = DeleteParameters()
        return self._plain_request(
            DAVMethod.DELETE,
            path,
            {"If": dav_headers.if_header(parameters.lock_token)},
        )

    def copy_request(
        self,
        source: str,
        destination: str,
        parameters: Optional[CopyParameters] = None,
    ) -> DAVRequest:
        """
        Build a COPY request.  The Destination header always carries an
        absolute URL.
        """
        _required(destination, "destination")
        if parameters is None:
            parameters = CopyParameters()
        apply_to = parameters.apply_to or ApplyTo.Copy.RESOURCE_AND_ALL_DESCENDANTS
        return self._plain_request(
            DAVMethod.COPY,
            source,
            {
                "Destination": self._resolve_url(destination),
                "Depth": dav_headers.depth_for_copy(apply_to),
                "Overwrite": dav_headers.overwrite_header(parameters.overwrite),
                "If": dav_headers.if_header(parameters.dest_lock_token),
            },
        )

    def move_request(
        self,
        source: str,
        destination: str,
        parameters: Optional[MoveParameters] = None,
    ) -> DAVRequest:
        """
        Build a MOVE request.  Lock tokens of both the source and the
        destination go into one If header.
        """
        _required(destination, "destination")
        if parameters is None:
            parameters = MoveParameters()
        return self._plain_request(
            DAVMethod.MOVE,
            source,
            {
                "Destination": self._resolve_url(destination),
                "Overwrite": dav_headers.overwrite_header(parameters.overwrite),
                "If": dav_headers.if_header(
                    parameters.source_lock_token, parameters.dest_lock_token
                ),
            },
        )

    def lock_request(
        self,
        path: str,
        parameters: Optional[LockParameters] = None,
    ) -> DAVRequest:
        """
        Build a LOCK request for a new write lock.
        """
        if parameters is None:
            parameters = LockParameters()
        body = build_lock_body(parameters.lock_scope, parameters.owner)
        headers: Dict[str, Optional[str]] = {}
        if parameters.apply_to is not None:
            headers["Depth"] = dav_headers.depth_for_lock(parameters.apply_to)
        if parameters.timeout is not None:
            headers["Timeout"] = dav_headers.timeout_header(parameters.timeout)
        return self._xml_request(DAVMethod.LOCK, path, body, headers)

    def unlock_request(
        self,
        path: str,
        parameters: UnlockParameters,
    ) -> DAVRequest:
        _required(parameters, "parameters")
        return self._plain_request(
            DAVMethod.UNLOCK,
            path,
            {"Lock-Token": dav_headers.lock_token_header(parameters.lock_token)},
        )

    def options_request(self, path: str) -> DAVRequest:
        return self._plain_request(DAVMethod.OPTIONS, path)

    # =========================================================================
    # Response parsers
    # =========================================================================

    def _body(self, response: DAVResponse) -> Union[bytes, str]:
        """
        The response body, decoded if the server named a charset.
        Without one the XML declaration of the body decides.
        """
        match = _charset_re.search(response.header("Content-Type") or "")
        if not match:
            return response.body
        try:
            return response.body.decode(match.group(1))
        except LookupError:
            return response.body.decode("utf-8", errors="replace")
        except UnicodeDecodeError:
            error.weirdness(f"response body is not {match.group(1)}")
            return response.body.decode("utf-8", errors="replace")

    def parse_propfind(self, response: DAVResponse) -> PropfindResponse:
        """
        Parse a PROPFIND response.

        Args:
            response: The DAVResponse from the server

        Returns:
            PropfindResponse with one resource per response element
        """
        return parse_propfind_response(
            self._body(response),
            status_code=response.status,
            description=response.reason,
            huge_tree=self.huge_tree,
        )

    def parse_proppatch(self, response: DAVResponse) -> ProppatchResponse:
        return parse_proppatch_response(
            self._body(response),
            status_code=response.status,
            description=response.reason,
            huge_tree=self.huge_tree,
        )

    def parse_mkcalendar(self, response: DAVResponse) -> MkCalendarResponse:
        return parse_mkcalendar_response(
            self._body(response),
            status_code=response.status,
            description=response.reason,
            huge_tree=self.huge_tree,
        )

    def parse_mkcol_extended(self, response: DAVResponse) -> MkColExtendedResponse:
        return parse_mkcol_extended_response(
            self._body(response),
            status_code=response.status,
            description=response.reason,
            huge_tree=self.huge_tree,
        )

    def parse_report(self, response: DAVResponse) -> ReportResponse:
        """
        Parse a multiget REPORT response.

        Args:
            response: The DAVResponse from the server

        Returns:
            ReportResponse with one resource per requested href
        """
        return parse_report_response(
            self._body(response),
            status_code=response.status,
            description=response.reason,
            huge_tree=self.huge_tree,
        )

    def parse_lock(self, response: DAVResponse) -> LockResponse:
        """
        Parse a LOCK response.  The body of a failed LOCK is not looked at.
        """
        if not response.ok:
            return LockResponse(response.status, response.reason)
        return parse_lock_response(
            self._body(response),
            status_code=response.status,
            description=response.reason,
            huge_tree=self.huge_tree,
        )

    def parse_options(self, response: DAVResponse) -> OptionsResponse:
        allowed, dav_options = dav_headers.parse_options_headers(response.headers)
        return OptionsResponse(
            response.status,
            response.reason,
            allowed_methods=allowed,
            dav_options=dav_options,
        )

    def parse_file(self, response: DAVResponse) -> FileResponse:
        return FileResponse(
            response.status,
            response.reason,
            content=response.body,
            content_type=response.header("Content-Type"),
        )

    def parse_status(self, response: DAVResponse) -> WebDAVResponse:
        """Response of a method without a response body worth parsing"""
        return WebDAVResponse(response.status, response.reason)
