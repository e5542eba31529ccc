"""
Conversions of single property elements into typed values.

Every function accepts None (the server did not send the property) and
then returns a neutral value.  Values a server got wrong give None, they
never raise.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Iterator
from urllib.parse import urlparse

from dateutil import parser as dateparser
from lxml.etree import QName, _Element

from .types import (
    ApplyTo,
    CalendarComponents,
    LockOwner,
    LockScope,
    PrincipalLockOwner,
    ResourceType,
    UriLockOwner,
)

log = logging.getLogger(__name__)

_resource_types = (
    ("addressbook", ResourceType.ADDRESSBOOK),
    ("calendar", ResourceType.CALENDAR),
    ("collection", ResourceType.COLLECTION),
    ("notification", ResourceType.NOTIFICATION),
    ("schedule-inbox", ResourceType.SCHEDULE_INBOX),
    ("schedule-outbox", ResourceType.SCHEDULE_OUTBOX),
)

_calendar_components = {
    "VEVENT": CalendarComponents.VEVENT,
    "VFREEBUSY": CalendarComponents.VFREEBUSY,
    "VTIMEZONE": CalendarComponents.VTIMEZONE,
    "VTODO": CalendarComponents.VTODO,
}

_timeout_re = re.compile(r"^second-(\d+)$", re.IGNORECASE | re.ASCII)


def local_name(element: _Element) -> str | None:
    """Local part of the element tag, None for comments and PIs"""
    if not isinstance(element.tag, str):
        return None
    return QName(element).localname


def iter_local(
    element: _Element, name: str, ignore_case: bool = False
) -> Iterator[_Element]:
    """Children of element with the given local name, in any namespace"""
    if ignore_case:
        name = name.lower()
    for child in element:
        child_name = local_name(child)
        if child_name is None:
            continue
        if ignore_case:
            child_name = child_name.lower()
        if child_name == name:
            yield child


def find_local(
    element: _Element, name: str, ignore_case: bool = False
) -> _Element | None:
    return next(iter_local(element, name, ignore_case), None)


def text_value(element: _Element) -> str:
    """All text content of element and its descendants"""
    return "".join(element.itertext())


def parse_string(element: _Element | None) -> str | None:
    if element is None:
        return None
    return text_value(element)


def parse_integer(element: _Element | None) -> int | None:
    if element is None:
        return None
    try:
        return int(text_value(element))
    except ValueError:
        log.debug("not an integer in %s: %r", element.tag, text_value(element))
        return None


def parse_datetime(element: _Element | None) -> datetime | None:
    """
    Both RFC 3339 (creationdate) and RFC 1123 (getlastmodified) dates
    are accepted.
    """
    if element is None:
        return None
    value = text_value(element)
    try:
        return dateparser.parse(value)
    except (ValueError, OverflowError):
        log.debug("not a date in %s: %r", element.tag, value)
        return None


def parse_resource_type(element: _Element | None) -> ResourceType:
    if element is None:
        return ResourceType.OTHER
    ret = ResourceType.OTHER
    for name, flag in _resource_types:
        if find_local(element, name) is not None:
            ret |= flag
    return ret


def parse_calendar_components(element: _Element | None) -> CalendarComponents:
    """
    Reads a supported-calendar-component-set.  Unknown component names
    (VJOURNAL, for one) are ignored.
    """
    if element is None:
        return CalendarComponents.NONE
    ret = CalendarComponents.NONE
    comp_tag = QName(QName(element).namespace, "comp").text
    for comp in element.iterchildren(comp_tag):
        ret |= _calendar_components.get(comp.get("name"), CalendarComponents.NONE)
    return ret


def parse_lock_scope(element: _Element | None) -> LockScope | None:
    if element is None:
        return None
    if find_local(element, "shared", ignore_case=True) is not None:
        return LockScope.SHARED
    if find_local(element, "exclusive", ignore_case=True) is not None:
        return LockScope.EXCLUSIVE
    return None


def parse_lock_depth(element: _Element | None) -> ApplyTo.Lock | None:
    if element is None:
        return None
    if text_value(element).strip() == "0":
        return ApplyTo.Lock.RESOURCE_ONLY
    return ApplyTo.Lock.RESOURCE_AND_ALL_DESCENDANTS


def _is_absolute_uri(value: str) -> bool:
    if not value or re.search(r"\s", value):
        return False
    try:
        return bool(urlparse(value).scheme)
    except ValueError:
        ## unbalanced brackets in the netloc, among others
        return False


def parse_lock_owner(element: _Element | None) -> LockOwner | None:
    if element is None:
        return None
    href = find_local(element, "href", ignore_case=True)
    if href is not None:
        uri = text_value(href).strip()
        if _is_absolute_uri(uri):
            return UriLockOwner(uri)
    principal = text_value(element).strip()
    if principal:
        return PrincipalLockOwner(principal)
    return None


def parse_lock_timeout(element: _Element | None) -> timedelta | None:
    """
    ``Second-<n>`` gives n seconds.  ``Infinite``, ``infinity`` and
    anything unparseable give None, meaning the lock does not expire.
    """
    if element is None:
        return None
    value = text_value(element).strip()
    if value.lower() == "infinity":
        return None
    match = _timeout_re.match(value)
    if match:
        try:
            return timedelta(seconds=int(match.group(1)))
        except OverflowError:
            log.debug("lock timeout out of range: %r", value)
    return None
