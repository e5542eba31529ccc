"""
Core protocol types for the Sans-I/O WebDAV implementation.

These dataclasses represent HTTP requests and responses at the protocol level,
independent of any I/O implementation, and the typed resource/property/lock
model the response parsers produce.  All of them are immutable.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntFlag
from typing import ClassVar, Union

from lxml.etree import QName

from webdav_client.lib import error


class DAVMethod(Enum):
    """WebDAV/CalDAV/CardDAV HTTP methods."""

    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    REPORT = "REPORT"
    MKCALENDAR = "MKCALENDAR"
    MKCOL = "MKCOL"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    MOVE = "MOVE"
    COPY = "COPY"
    LOCK = "LOCK"
    UNLOCK = "UNLOCK"


@dataclass(frozen=True)
class DAVRequest:
    """
    Represents an HTTP request to be made.

    This is a pure data structure with no I/O. It describes what request
    should be made, but does not make it.

    Attributes:
        method: HTTP method (GET, PUT, PROPFIND, etc.)
        url: Full URL for the request
        headers: HTTP headers as dict
        body: Request body as bytes (optional)
    """

    method: DAVMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def with_header(self, name: str, value: str) -> "DAVRequest":
        """Return new request with additional header."""
        new_headers = {**self.headers, name: value}
        return DAVRequest(
            method=self.method,
            url=self.url,
            headers=new_headers,
            body=self.body,
        )

    def with_body(self, body: bytes) -> "DAVRequest":
        """Return new request with body."""
        return DAVRequest(
            method=self.method,
            url=self.url,
            headers=self.headers,
            body=body,
        )


@dataclass(frozen=True)
class DAVResponse:
    """
    Represents an HTTP response received.

    This is what the dispatcher hands back: status code, reason phrase,
    headers and the raw body.

    Attributes:
        status: HTTP status code
        headers: HTTP headers as dict
        body: Response body as bytes
        reason: Reason phrase sent by the server
    """

    status: int
    headers: dict[str, str]
    body: bytes
    reason: str = ""

    @property
    def ok(self) -> bool:
        """True if status indicates success (2xx)."""
        return 200 <= self.status < 300

    @property
    def is_multistatus(self) -> bool:
        """True if this is a 207 Multi-Status response."""
        return self.status == 207

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return default


@dataclass(frozen=True, kw_only=True)
class NamespaceAttr:
    """
    An XML namespace declaration to put on a request element.

    An empty prefix declares the default namespace (a bare ``xmlns``).
    """

    prefix: str | None = None
    namespace: str

    def __post_init__(self) -> None:
        if not self.namespace:
            raise ValueError("namespace of a NamespaceAttr cannot be empty")

    @property
    def attribute(self) -> str:
        """The attribute name this declaration renders as."""
        return f"xmlns:{self.prefix}" if self.prefix else "xmlns"


PropertyName = Union[QName, str]


def to_qname(name: PropertyName) -> QName:
    """Normalize a Clark-notation string or QName into a QName."""
    if name is None:
        raise ValueError("property name cannot be None")
    if isinstance(name, QName):
        return name
    if not name:
        raise ValueError("property name cannot be empty")
    return QName(name)


class ResourceType(IntFlag):
    OTHER = 0
    COLLECTION = 1
    CALENDAR = 2
    ADDRESSBOOK = 4
    SCHEDULE_INBOX = 8
    SCHEDULE_OUTBOX = 16
    NOTIFICATION = 32


class CalendarComponents(IntFlag):
    NONE = 0
    VEVENT = 1
    VFREEBUSY = 2
    VTIMEZONE = 4
    VTODO = 8


class HTTPMethods(IntFlag):
    """Methods a server may advertise in the Allow header of OPTIONS"""

    NONE = 0
    ACL = 1 << 1
    BDELETE = 1 << 2
    BPROPPATCH = 1 << 3
    CONNECT = 1 << 4
    COPY = 1 << 5
    DELETE = 1 << 6
    GET = 1 << 7
    HEAD = 1 << 8
    LOCK = 1 << 9
    MKCALENDAR = 1 << 10
    MKCOL = 1 << 11
    MKCOL_EXTENDED = 1 << 12
    MOVE = 1 << 13
    OPTIONS = 1 << 14
    PATCH = 1 << 15
    POLL = 1 << 16
    POST = 1 << 17
    PROPFIND = 1 << 18
    PROPPATCH = 1 << 19
    PUT = 1 << 20
    REPORT = 1 << 21
    SEARCH = 1 << 22
    SUBSCRIBE = 1 << 23
    TRACE = 1 << 24
    UNLOCK = 1 << 25
    UNSUBSCRIBE = 1 << 26


class LockScope(Enum):
    SHARED = "shared"
    EXCLUSIVE = "exclusive"


class ApplyTo:
    """
    Depth choices, one enum per method accepting a Depth header.  The
    enum values are the header values.
    """

    class Propfind(Enum):
        RESOURCE_ONLY = "0"
        RESOURCE_AND_CHILDREN = "1"
        RESOURCE_AND_ALL_DESCENDANTS = "infinity"

    class Copy(Enum):
        RESOURCE_ONLY = "0"
        RESOURCE_AND_ALL_DESCENDANTS = "infinity"

    class Lock(Enum):
        RESOURCE_ONLY = "0"
        RESOURCE_AND_ALL_DESCENDANTS = "infinity"


@dataclass(frozen=True)
class UriLockOwner:
    """Lock owner identified by an absolute URI"""

    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError("lock owner URI cannot be None")


@dataclass(frozen=True)
class PrincipalLockOwner:
    """Lock owner identified by a principal name"""

    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError("lock owner principal name cannot be None")


LockOwner = Union[UriLockOwner, PrincipalLockOwner]


@dataclass(frozen=True)
class ActiveLock:
    """
    One entry of a lockdiscovery property.

    A timeout of None means the lock never expires (or the server did not
    tell).
    """

    scope: LockScope | None = None
    depth: ApplyTo.Lock | None = None
    owner: LockOwner | None = None
    timeout: timedelta | None = None
    token: str | None = None
    lock_root: str | None = None


@dataclass(frozen=True)
class WebDAVProperty:
    """
    A property as delivered by the server.  The value is the raw inner
    XML of the property element, not unescaped text.
    """

    name: QName
    value: str


@dataclass(frozen=True)
class PropertyStatus:
    """The outcome the server reported for one property in one propstat"""

    name: QName
    status_code: int
    description: str | None = None


@dataclass(frozen=True)
class WebDAVResource:
    """
    A resource from a PROPFIND or REPORT multistatus response.

    properties holds every property of every propstat, in document order;
    a server may repeat a property, so callers filter.
    """

    uri: str
    is_collection: bool = False
    is_hidden: bool = False
    resource_type: ResourceType = ResourceType.OTHER
    calendar_components: CalendarComponents = CalendarComponents.NONE
    display_name: str | None = None
    content_type: str | None = None
    content_language: str | None = None
    content_length: int | None = None
    creation_date: datetime | None = None
    last_modified_date: datetime | None = None
    etag: str | None = None
    properties: tuple[WebDAVProperty, ...] = ()
    property_statuses: tuple[PropertyStatus, ...] = ()
    active_locks: tuple[ActiveLock, ...] = ()


@dataclass(frozen=True)
class WebDAVResponse:
    """
    Outcome of one WebDAV operation.

    Attributes:
        status_code: HTTP status code of the response
        description: reason phrase of the response
    """

    status_code: int
    description: str | None = None

    method: ClassVar[str] = ""

    @property
    def ok(self) -> bool:
        """True if status indicates success (2xx)."""
        return 200 <= self.status_code < 300

    def raise_for_status(self, url: str | None = None, method: str | None = None) -> None:
        """Raise the DAVError matching the method if the operation failed"""
        if self.ok:
            return
        reason = f"{self.status_code} {self.description or ''}".strip()
        if self.status_code in (401, 403):
            raise error.AuthorizationError(url=url, reason=reason)
        if self.status_code == 404:
            raise error.NotFoundError(url=url, reason=reason)
        raise error.exception_by_method[(method or self.method).lower()](url=url, reason=reason)


@dataclass(frozen=True)
class PropfindResponse(WebDAVResponse):
    resources: tuple[WebDAVResource, ...] = ()

    method: ClassVar[str] = "propfind"


@dataclass(frozen=True)
class ReportResponse(WebDAVResponse):
    resources: tuple[WebDAVResource, ...] = ()

    method: ClassVar[str] = "report"


@dataclass(frozen=True)
class ProppatchResponse(WebDAVResponse):
    property_statuses: tuple[PropertyStatus, ...] = ()

    method: ClassVar[str] = "proppatch"


@dataclass(frozen=True)
class MkCalendarResponse(WebDAVResponse):
    property_statuses: tuple[PropertyStatus, ...] = ()

    method: ClassVar[str] = "mkcalendar"


@dataclass(frozen=True)
class MkColExtendedResponse(WebDAVResponse):
    property_statuses: tuple[PropertyStatus, ...] = ()

    method: ClassVar[str] = "mkcol"


@dataclass(frozen=True)
class LockResponse(WebDAVResponse):
    active_locks: tuple[ActiveLock, ...] = ()

    method: ClassVar[str] = "lock"


@dataclass(frozen=True)
class OptionsResponse(WebDAVResponse):
    """
    Attributes:
        allowed_methods: flags built from the Allow header
        dav_options: compliance classes from the DAV header
    """

    allowed_methods: HTTPMethods = HTTPMethods.NONE
    dav_options: tuple[str, ...] = ()

    method: ClassVar[str] = "options"


@dataclass(frozen=True)
class FileResponse(WebDAVResponse):
    content: bytes = b""
    content_type: str | None = None

    method: ClassVar[str] = "get"
