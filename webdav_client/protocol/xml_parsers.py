"""
Pure functions for parsing WebDAV XML responses.

All functions in this module are pure - they take an XML body in and return
structured data out, with no side effects or I/O.

Parsing is best effort: a body that is empty or not well-formed XML gives a
response carrying only the HTTP status code and description.  Element names
of the DAV: core are matched by local name, ignoring case and namespace
prefix, since servers differ in both.
"""

import logging
import re
from dataclasses import dataclass
from xml.sax.saxutils import escape

from lxml import etree
from lxml.etree import _Element

from webdav_client.elements import cdav, dav
from webdav_client.lib import error

from . import property_values as values
from .property_values import find_local, iter_local, local_name
from .types import (
    ActiveLock,
    LockResponse,
    MkCalendarResponse,
    MkColExtendedResponse,
    PropertyStatus,
    PropfindResponse,
    ProppatchResponse,
    ReportResponse,
    ResourceType,
    WebDAVProperty,
    WebDAVResource,
)

log = logging.getLogger(__name__)

_status_re = re.compile(r".+?\s(\d\d\d)\s?.*")


@dataclass(frozen=True)
class ParsedDocument:
    """
    Outcome of parsing a response body: either the root element, or the
    reason there is none.
    """

    root: _Element | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.root is not None


@dataclass(frozen=True)
class Propstat:
    """One propstat block of a response element"""

    properties: tuple[_Element, ...]
    status_code: int
    description: str | None = None


def try_parse_xml(body: bytes | str | None, huge_tree: bool = False) -> ParsedDocument:
    """
    Parse a response body.

    Args:
        body: Raw XML response, bytes or already decoded text
        huge_tree: Allow parsing very large XML documents

    Returns:
        ParsedDocument with the root element, or with the parse error
    """
    if not body:
        return ParsedDocument(error="empty body")

    if isinstance(body, str):
        ## lxml refuses str input carrying an encoding declaration
        parser = etree.XMLParser(
            encoding="utf-8", huge_tree=huge_tree, resolve_entities=False
        )
        body = body.encode("utf-8")
    else:
        parser = etree.XMLParser(huge_tree=huge_tree, resolve_entities=False)

    try:
        root = etree.fromstring(body, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        log.debug(f"response body is not well-formed XML: {e}")
        return ParsedDocument(error=str(e))
    if root is None:
        return ParsedDocument(error="no root element")
    return ParsedDocument(root=root)


def status_to_code(status: str | None) -> int:
    """
    Extract status code from status string like "HTTP/1.1 200 OK".

    Returns 0 if there is no parseable status.
    """
    if not status:
        return 0
    match = _status_re.match(status.strip())
    if not match:
        return 0
    return int(match.group(1))


def inner_xml(element: _Element) -> str:
    """The markup between the start and end tag of element"""
    ret = escape(element.text or "")
    for child in element:
        ret += etree.tostring(child, encoding="unicode", with_tail=True)
    return ret


def _response_elements(root: _Element) -> list[_Element]:
    """
    The response elements of a multistatus document.

    The general format is:
        <multistatus>
            <response>...</response>
            <response>...</response>
        </multistatus>

    But sometimes there is an extra <xml> wrapper, and some servers send
    a lone response element.
    """
    if (local_name(root) or "").lower() == "xml":
        multistatus = find_local(root, "multistatus", ignore_case=True)
        if multistatus is not None:
            root = multistatus
    if (local_name(root) or "").lower() == "response":
        return [root]
    return list(iter_local(root, "response", ignore_case=True))


def parse_propstats(response: _Element) -> list[Propstat]:
    """
    Parse the propstat blocks of one response element.  A server may
    split the properties of a resource over several propstats, each
    with its own status.
    """
    ret = []
    for propstat in response.iter(etree.Element):
        if (local_name(propstat) or "").lower() != "propstat":
            continue
        status = find_local(propstat, "status", ignore_case=True)
        properties = []
        for prop in iter_local(propstat, "prop", ignore_case=True):
            properties.extend(x for x in prop if isinstance(x.tag, str))
        ret.append(
            Propstat(
                properties=tuple(properties),
                status_code=status_to_code(values.parse_string(status)),
                description=values.parse_string(
                    find_local(propstat, "responsedescription", ignore_case=True)
                ),
            )
        )
    return ret


def property_statuses(propstats: list[Propstat]) -> tuple[PropertyStatus, ...]:
    return tuple(
        PropertyStatus(
            name=etree.QName(prop),
            status_code=propstat.status_code,
            description=propstat.description,
        )
        for propstat in propstats
        for prop in propstat.properties
    )


def _find_property(properties: list[_Element], tag: str) -> _Element | None:
    for prop in properties:
        if prop.tag == tag:
            return prop
    return None


def _href_below(element: _Element, name: str) -> str | None:
    """Text of the href inside the named child of element"""
    child = find_local(element, name, ignore_case=True)
    if child is not None:
        child = find_local(child, "href", ignore_case=True)
    if child is None:
        return None
    return values.parse_string(child).strip() or None


def parse_lock_discovery(element: _Element | None) -> tuple[ActiveLock, ...]:
    """
    Parse a lockdiscovery element into its active locks.
    """
    if element is None:
        return ()
    locks = []
    for activelock in iter_local(element, "activelock", ignore_case=True):
        locks.append(
            ActiveLock(
                scope=values.parse_lock_scope(
                    find_local(activelock, "lockscope", ignore_case=True)
                ),
                depth=values.parse_lock_depth(
                    find_local(activelock, "depth", ignore_case=True)
                ),
                owner=values.parse_lock_owner(
                    find_local(activelock, "owner", ignore_case=True)
                ),
                timeout=values.parse_lock_timeout(
                    find_local(activelock, "timeout", ignore_case=True)
                ),
                token=_href_below(activelock, "locktoken"),
                lock_root=_href_below(activelock, "lockroot"),
            )
        )
    return tuple(locks)


def build_resource(uri: str, propstats: list[Propstat]) -> WebDAVResource:
    """
    Assemble a WebDAVResource from the propstats of one response element.

    The uri of a collection gets exactly one trailing slash.
    """
    properties = [prop for propstat in propstats for prop in propstat.properties]

    def find(tag: str) -> _Element | None:
        return _find_property(properties, tag)

    resource_type = values.parse_resource_type(find(dav.ResourceType.tag))
    is_hidden = (values.parse_integer(find(dav.IsHidden.tag)) or 0) > 0
    is_collection = (values.parse_integer(find(dav.IsCollection.tag)) or 0) > 0 or bool(
        resource_type & ResourceType.COLLECTION
    )
    if is_collection:
        uri = uri.rstrip("/") + "/"

    return WebDAVResource(
        uri=uri,
        is_collection=is_collection,
        is_hidden=is_hidden,
        resource_type=resource_type,
        calendar_components=values.parse_calendar_components(
            find(cdav.SupportedCalendarComponentSet.tag)
        ),
        display_name=values.parse_string(find(dav.DisplayName.tag)),
        content_type=values.parse_string(find(dav.GetContentType.tag)),
        content_language=values.parse_string(find(dav.GetContentLanguage.tag)),
        content_length=values.parse_integer(find(dav.GetContentLength.tag)),
        creation_date=values.parse_datetime(find(dav.CreationDate.tag)),
        last_modified_date=values.parse_datetime(find(dav.GetLastModified.tag)),
        etag=values.parse_string(find(dav.GetEtag.tag)),
        properties=tuple(
            WebDAVProperty(name=etree.QName(prop), value=inner_xml(prop))
            for prop in properties
        ),
        property_statuses=property_statuses(propstats),
        active_locks=parse_lock_discovery(find(dav.LockDiscovery.tag)),
    )


def _parse_resource(response: _Element) -> WebDAVResource:
    href = find_local(response, "href", ignore_case=True)
    if href is None:
        error.weirdness("response element without href", response)
        uri = ""
    else:
        uri = values.parse_string(href).strip()
    return build_resource(uri, parse_propstats(response))


def _parse_resources(
    body: bytes | str | None, huge_tree: bool
) -> tuple[WebDAVResource, ...] | None:
    document = try_parse_xml(body, huge_tree=huge_tree)
    if not document.ok:
        return None
    return tuple(_parse_resource(x) for x in _response_elements(document.root))


def _parse_property_statuses(
    body: bytes | str | None, huge_tree: bool
) -> tuple[PropertyStatus, ...] | None:
    document = try_parse_xml(body, huge_tree=huge_tree)
    if not document.ok:
        return None
    return tuple(
        status
        for response in _response_elements(document.root)
        for status in property_statuses(parse_propstats(response))
    )


def parse_propfind_response(
    body: bytes | str | None,
    status_code: int = 207,
    description: str | None = None,
    huge_tree: bool = False,
) -> PropfindResponse:
    """
    Parse a PROPFIND response.

    Args:
        body: Raw XML response
        status_code: HTTP status code of the response
        description: HTTP reason phrase of the response
        huge_tree: Allow parsing very large XML documents

    Returns:
        PropfindResponse with one resource per response element, in
        document order
    """
    resources = _parse_resources(body, huge_tree)
    if resources is None:
        return PropfindResponse(status_code, description)
    return PropfindResponse(status_code, description, resources=resources)


def parse_report_response(
    body: bytes | str | None,
    status_code: int = 207,
    description: str | None = None,
    huge_tree: bool = False,
) -> ReportResponse:
    """
    Parse a multiget REPORT response.  Same format as PROPFIND; the
    calendar-data or address-data is in the resource properties.
    """
    resources = _parse_resources(body, huge_tree)
    if resources is None:
        return ReportResponse(status_code, description)
    return ReportResponse(status_code, description, resources=resources)


def parse_proppatch_response(
    body: bytes | str | None,
    status_code: int = 207,
    description: str | None = None,
    huge_tree: bool = False,
) -> ProppatchResponse:
    statuses = _parse_property_statuses(body, huge_tree)
    if statuses is None:
        return ProppatchResponse(status_code, description)
    return ProppatchResponse(status_code, description, property_statuses=statuses)


def parse_mkcalendar_response(
    body: bytes | str | None,
    status_code: int = 201,
    description: str | None = None,
    huge_tree: bool = False,
) -> MkCalendarResponse:
    """
    Parse a MKCALENDAR response.  A plain 201 comes without a body; a
    failed request may carry a multistatus telling which property was
    the problem.
    """
    statuses = _parse_property_statuses(body, huge_tree)
    if statuses is None:
        return MkCalendarResponse(status_code, description)
    return MkCalendarResponse(status_code, description, property_statuses=statuses)


def parse_mkcol_extended_response(
    body: bytes | str | None,
    status_code: int = 201,
    description: str | None = None,
    huge_tree: bool = False,
) -> MkColExtendedResponse:
    statuses = _parse_property_statuses(body, huge_tree)
    if statuses is None:
        return MkColExtendedResponse(status_code, description)
    return MkColExtendedResponse(status_code, description, property_statuses=statuses)


def parse_lock_response(
    body: bytes | str | None,
    status_code: int = 200,
    description: str | None = None,
    huge_tree: bool = False,
) -> LockResponse:
    """
    Parse a LOCK response, a prop element holding the lockdiscovery
    property.
    """
    document = try_parse_xml(body, huge_tree=huge_tree)
    if not document.ok:
        return LockResponse(status_code, description)
    for element in document.root.iter(etree.Element):
        if (local_name(element) or "").lower() == "lockdiscovery":
            return LockResponse(
                status_code, description, active_locks=parse_lock_discovery(element)
            )
    return LockResponse(status_code, description)
