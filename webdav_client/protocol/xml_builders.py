"""
Pure functions for building WebDAV XML request bodies.

All functions in this module are pure - they take data in and return XML out,
with no side effects or I/O.  Every body is a complete document: an XML
declaration followed by one root element carrying ``xmlns:D="DAV:"``.
"""
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from lxml import etree

from .params import ReportKind
from .params import ReportParameters
from .types import LockOwner
from .types import LockScope
from .types import NamespaceAttr
from .types import PropertyName
from .types import UriLockOwner
from .types import to_qname
from webdav_client.elements import carddav
from webdav_client.elements import cdav
from webdav_client.elements import dav
from webdav_client.elements.base import BaseElement
from webdav_client.elements.base import Property

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def _to_document(root: BaseElement) -> str:
    return XML_DECLARATION + etree.tostring(root.xmlelement(), encoding="unicode")


def _empty_properties(names: Iterable[PropertyName]) -> List[BaseElement]:
    return [Property(to_qname(name)) for name in names]


def _set_block(properties_to_set: Dict[PropertyName, str]) -> BaseElement:
    """``<D:set>`` with one ``<D:prop>`` per property, values as inner XML"""
    set_element = dav.Set()
    for name, value in properties_to_set.items():
        set_element += dav.Prop() + Property(to_qname(name), value)
    return set_element


def build_propfind_body(
    standard_properties: Optional[List[PropertyName]] = None,
    custom_properties: Optional[List[PropertyName]] = None,
    namespaces: Optional[List[NamespaceAttr]] = None,
) -> str:
    """
    Build PROPFIND request body XML.

    Args:
        standard_properties: Properties to retrieve.  None or empty asks
            for all properties with ``<D:allprop/>``.
        custom_properties: Properties for the ``<D:include>`` block
        namespaces: Declarations put on ``prop`` and ``include``

    Returns:
        The XML document as a string
    """
    namespaces = namespaces or []
    propfind = dav.Propfind()
    if not standard_properties:
        propfind += dav.Allprop()
    else:
        propfind += dav.Prop(namespaces=namespaces) + _empty_properties(
            standard_properties
        )
    if custom_properties:
        propfind += dav.Include(namespaces=namespaces) + _empty_properties(
            custom_properties
        )
    return _to_document(propfind)


def build_proppatch_body(
    properties_to_set: Optional[Dict[PropertyName, str]] = None,
    properties_to_remove: Optional[List[PropertyName]] = None,
    namespaces: Optional[List[NamespaceAttr]] = None,
) -> str:
    """
    Build PROPPATCH request body.

    Args:
        properties_to_set: Properties to set (name -> XML fragment)
        properties_to_remove: Properties to remove
        namespaces: Declarations put on the root element

    Returns:
        The XML document as a string
    """
    propertyupdate = dav.PropertyUpdate(namespaces=namespaces)
    if properties_to_set:
        propertyupdate += _set_block(properties_to_set)
    if properties_to_remove:
        remove = dav.Remove()
        for name in properties_to_remove:
            remove += dav.Prop() + Property(to_qname(name))
        propertyupdate += remove
    return _to_document(propertyupdate)


def build_mkcalendar_body(
    properties_to_set: Optional[Dict[PropertyName, str]] = None,
    namespaces: Optional[List[NamespaceAttr]] = None,
) -> str:
    """
    Build MKCALENDAR request body (RFC 4791 section 5.3.1).
    """
    mkcalendar = cdav.Mkcalendar(namespaces=namespaces)
    if properties_to_set:
        mkcalendar += _set_block(properties_to_set)
    return _to_document(mkcalendar)


def build_mkcol_body(
    properties_to_set: Optional[Dict[PropertyName, str]] = None,
    namespaces: Optional[List[NamespaceAttr]] = None,
) -> str:
    """
    Build extended MKCOL request body (RFC 5689).
    """
    mkcol = dav.Mkcol(namespaces=namespaces)
    if properties_to_set:
        mkcol += _set_block(properties_to_set)
    return _to_document(mkcol)


def build_lock_body(
    lock_scope: LockScope = LockScope.SHARED,
    owner: Optional[LockOwner] = None,
) -> str:
    """
    Build LOCK request body.  Only write locks exist in WebDAV.
    """
    scope = dav.Exclusive() if lock_scope == LockScope.EXCLUSIVE else dav.Shared()
    lockinfo = dav.LockInfo() + (dav.LockScope() + scope)
    lockinfo += dav.LockType() + dav.Write()
    if owner is not None:
        if isinstance(owner, UriLockOwner):
            lockinfo += dav.Owner() + dav.Href(owner.value)
        else:
            lockinfo += dav.Owner(owner.value)
    return _to_document(lockinfo)


_report_roots = {
    ReportKind.ADDRESSBOOK_MULTIGET: carddav.AddressbookMultiGet,
    ReportKind.CALENDAR_MULTIGET: cdav.CalendarMultiGet,
}


def build_report_body(parameters: ReportParameters) -> Optional[str]:
    """
    Build the body of a multiget REPORT.

    Args:
        parameters: AddressBookMultiGetParameters or CalendarMultiGetParameters

    Returns:
        The XML document as a string, or None for a report kind
        this module does not know.
    """
    root_class = _report_roots.get(getattr(parameters, "kind", None))
    if root_class is None:
        return None

    report = root_class(namespaces=parameters.namespaces)
    if not parameters.standard_properties:
        report += dav.Allprop()
    else:
        report += dav.Prop() + _empty_properties(parameters.standard_properties)
    for uri in parameters.get_uris or []:
        report += dav.Href(uri)
    return _to_document(report)
