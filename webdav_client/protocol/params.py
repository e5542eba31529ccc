"""
Parameter objects for the WebDAV operations.

Property names may be given as lxml QName objects or as Clark notation
strings, ``"{DAV:}displayname"``.  Property values are literal XML
fragments and are inserted into the request body unescaped.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Union

from .types import ApplyTo, LockOwner, LockScope, NamespaceAttr, PropertyName


@dataclass
class PropfindParameters:
    """
    Attributes:
        apply_to: Depth of the request, RESOURCE_AND_CHILDREN if None
        standard_properties: Properties to ask for.  None or empty asks
            for all properties (``allprop``).
        custom_properties: Properties outside the allprop set, sent in an
            ``include`` block
        namespaces: Declarations put on the ``prop`` and ``include`` elements
    """

    apply_to: Optional[ApplyTo.Propfind] = None
    standard_properties: Optional[List[PropertyName]] = None
    custom_properties: List[PropertyName] = field(default_factory=list)
    namespaces: List[NamespaceAttr] = field(default_factory=list)


@dataclass
class ProppatchParameters:
    properties_to_set: Dict[PropertyName, str] = field(default_factory=dict)
    properties_to_remove: List[PropertyName] = field(default_factory=list)
    namespaces: List[NamespaceAttr] = field(default_factory=list)
    lock_token: Optional[str] = None


@dataclass
class MkCalendarParameters:
    properties_to_set: Dict[PropertyName, str] = field(default_factory=dict)
    namespaces: List[NamespaceAttr] = field(default_factory=list)
    lock_token: Optional[str] = None


@dataclass
class MkColExtendedParameters:
    properties_to_set: Dict[PropertyName, str] = field(default_factory=dict)
    namespaces: List[NamespaceAttr] = field(default_factory=list)
    lock_token: Optional[str] = None


@dataclass
class MkColParameters:
    lock_token: Optional[str] = None


@dataclass
class LockParameters:
    """
    Attributes:
        apply_to: Depth header of the request, not sent if None
        lock_scope: Shared or exclusive lock
        owner: Who holds the lock, omitted from the body if None
        timeout: Requested lock lifetime, not sent if None
    """

    apply_to: Optional[ApplyTo.Lock] = None
    lock_scope: LockScope = LockScope.SHARED
    owner: Optional[LockOwner] = None
    timeout: Optional[timedelta] = None


@dataclass
class UnlockParameters:
    lock_token: str

    def __post_init__(self) -> None:
        if not self.lock_token:
            raise ValueError("UNLOCK needs the token of the lock to release")


@dataclass
class CopyParameters:
    apply_to: Optional[ApplyTo.Copy] = None
    overwrite: bool = True
    dest_lock_token: Optional[str] = None


@dataclass
class MoveParameters:
    overwrite: bool = True
    source_lock_token: Optional[str] = None
    dest_lock_token: Optional[str] = None


@dataclass
class DeleteParameters:
    lock_token: Optional[str] = None


@dataclass
class PutFileParameters:
    content_type: str = "application/octet-stream"
    lock_token: Optional[str] = None


class ReportKind(Enum):
    ADDRESSBOOK_MULTIGET = "addressbook-multiget"
    CALENDAR_MULTIGET = "calendar-multiget"


@dataclass
class MultiGetParameters:
    """
    Fetch a known set of resources in one REPORT.

    Attributes:
        get_uris: hrefs of the resources, sent in the given order
        standard_properties: Properties to ask for, None or empty for allprop
        namespaces: Declarations put on the report root element
    """

    get_uris: List[str] = field(default_factory=list)
    standard_properties: Optional[List[PropertyName]] = None
    namespaces: List[NamespaceAttr] = field(default_factory=list)

    kind: ClassVar[Optional[ReportKind]] = None


class AddressBookMultiGetParameters(MultiGetParameters):
    """CardDAV addressbook-multiget (RFC 6352)"""

    kind = ReportKind.ADDRESSBOOK_MULTIGET


class CalendarMultiGetParameters(MultiGetParameters):
    """CalDAV calendar-multiget (RFC 4791)"""

    kind = ReportKind.CALENDAR_MULTIGET


ReportParameters = Union[AddressBookMultiGetParameters, CalendarMultiGetParameters]
