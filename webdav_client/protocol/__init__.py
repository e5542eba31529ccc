"""
Sans-I/O WebDAV protocol implementation.

This module provides protocol-level operations without any I/O.
It builds requests and parses responses as pure data transformations.

The protocol layer is organized into:
- types: Core data structures (DAVRequest, DAVResponse, result types)
- params: Parameter objects of the operations
- xml_builders: Pure functions to build XML request bodies
- property_values: Conversion of property elements into typed values
- xml_parsers: Pure functions to parse XML response bodies
- headers: WebDAV request header values
- operations: High-level WebDAVProtocol class combining builders and parsers

Example usage:

    from webdav_client.protocol import PropfindParameters, WebDAVProtocol

    protocol = WebDAVProtocol(base_url="https://dav.example.com")

    # Build a request (no I/O)
    request = protocol.propfind_request(
        "/files/",
        PropfindParameters(standard_properties=["{DAV:}displayname"]),
    )

    # Execute via your preferred I/O (sync, async, or mock)
    response = your_http_client.execute(request)

    # Parse response (no I/O)
    result = protocol.parse_propfind(response)
"""

from .types import (
    # Enums
    ApplyTo,
    CalendarComponents,
    DAVMethod,
    HTTPMethods,
    LockScope,
    ResourceType,
    # Request/Response
    DAVRequest,
    DAVResponse,
    # Model
    ActiveLock,
    NamespaceAttr,
    PrincipalLockOwner,
    PropertyStatus,
    UriLockOwner,
    WebDAVProperty,
    WebDAVResource,
    # Result types
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
from .params import (
    AddressBookMultiGetParameters,
    CalendarMultiGetParameters,
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
    ReportKind,
    UnlockParameters,
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
    parse_lock_discovery,
    parse_lock_response,
    parse_mkcalendar_response,
    parse_mkcol_extended_response,
    parse_propfind_response,
    parse_proppatch_response,
    parse_report_response,
    try_parse_xml,
)
from .operations import WebDAVProtocol

__all__ = [
    # Enums
    "ApplyTo",
    "CalendarComponents",
    "DAVMethod",
    "HTTPMethods",
    "LockScope",
    "ResourceType",
    # Request/Response
    "DAVRequest",
    "DAVResponse",
    # Model
    "ActiveLock",
    "NamespaceAttr",
    "PrincipalLockOwner",
    "PropertyStatus",
    "UriLockOwner",
    "WebDAVProperty",
    "WebDAVResource",
    # Result types
    "FileResponse",
    "LockResponse",
    "MkCalendarResponse",
    "MkColExtendedResponse",
    "OptionsResponse",
    "PropfindResponse",
    "ProppatchResponse",
    "ReportResponse",
    "WebDAVResponse",
    # Parameters
    "AddressBookMultiGetParameters",
    "CalendarMultiGetParameters",
    "CopyParameters",
    "DeleteParameters",
    "LockParameters",
    "MkCalendarParameters",
    "MkColExtendedParameters",
    "MkColParameters",
    "MoveParameters",
    "PropfindParameters",
    "ProppatchParameters",
    "PutFileParameters",
    "ReportKind",
    "UnlockParameters",
    # XML Builders
    "build_lock_body",
    "build_mkcalendar_body",
    "build_mkcol_body",
    "build_propfind_body",
    "build_proppatch_body",
    "build_report_body",
    # XML Parsers
    "parse_lock_discovery",
    "parse_lock_response",
    "parse_mkcalendar_response",
    "parse_mkcol_extended_response",
    "parse_propfind_response",
    "parse_proppatch_response",
    "parse_report_response",
    "try_parse_xml",
    # Protocol
    "WebDAVProtocol",
]
