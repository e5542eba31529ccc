#!/usr/bin/env python
import sys
from typing import ClassVar
from typing import Dict
from typing import List
from typing import Optional
from typing import Union
from xml.sax.saxutils import quoteattr

from lxml import etree
from lxml.etree import _Element

from webdav_client.lib.namespace import nsmap

if sys.version_info < (3, 9):
    from typing import Iterable
else:
    from collections.abc import Iterable

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


def to_unicode(value: Union[str, bytes, None]) -> Optional[str]:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def set_inner_xml(element: _Element, markup: str) -> None:
    """
    Put a markup fragment into element as literal XML, not as escaped
    text.  Prefixes declared on element (or its ancestors) may be used
    in the fragment.
    """
    declarations = " ".join(
        "%s=%s" % ("xmlns:%s" % prefix if prefix else "xmlns", quoteattr(uri))
        for prefix, uri in element.nsmap.items()
    )
    try:
        wrapper = etree.fromstring("<wrapper %s>%s</wrapper>" % (declarations, markup))
    except etree.XMLSyntaxError as e:
        raise ValueError(f"not a well-formed XML fragment: {markup!r}") from e
    element.text = wrapper.text
    for child in list(wrapper):
        element.append(child)


class BaseElement:
    """
    An XML element of a request body.  Elements are composed with ``+``
    and rendered through lxml by ``xmlelement()``.

    The root element of a document carries the ``root_nsmap``
    declarations; caller supplied ``namespaces`` are declared on the
    element they are given to and win over ``root_nsmap`` for the same
    prefix.
    """

    children: Optional[List[Self]] = None
    tag: ClassVar[Optional[str]] = None
    root_nsmap: ClassVar[Dict[str, str]] = {"D": nsmap["D"]}
    value: Optional[str] = None
    inner_xml: Optional[str] = None
    attributes: Optional[dict] = None
    namespaces: Optional[list] = None

    def __init__(
        self,
        name: Optional[str] = None,
        value: Union[str, bytes, None] = None,
        namespaces: Optional[Iterable] = None,
    ) -> None:
        self.children = []
        self.attributes = {}
        self.namespaces = list(namespaces or [])
        value = to_unicode(value)
        self.value = None
        if name is not None:
            self.attributes["name"] = name
        if value is not None:
            self.value = value

    def __add__(
        self, other: Union["BaseElement", Iterable["BaseElement"]]
    ) -> "BaseElement":
        return self.append(other)

    def __str__(self) -> str:
        utf8 = etree.tostring(
            self.xmlelement(), encoding="utf-8", xml_declaration=True, pretty_print=True
        )
        return str(utf8, "utf-8")

    def element_nsmap(self, root: bool) -> Dict[Optional[str], str]:
        ret: Dict[Optional[str], str] = dict(self.root_nsmap) if root else {}
        for namespace in self.namespaces or []:
            ret[namespace.prefix or None] = namespace.namespace
        return ret

    def xmlelement(self, parent: Optional[_Element] = None) -> _Element:
        if self.tag is None:
            raise ValueError("Unexpected value None for self.tag")

        if self.attributes is None:
            raise ValueError("Unexpected value None for self.attributes")

        if parent is None:
            root = etree.Element(self.tag, nsmap=self.element_nsmap(root=True))
        else:
            root = etree.SubElement(
                parent, self.tag, nsmap=self.element_nsmap(root=False) or None
            )
        if self.value is not None:
            root.text = self.value

        for k in self.attributes:
            root.set(k, self.attributes[k])

        if self.inner_xml:
            set_inner_xml(root, self.inner_xml)

        self.xmlchildren(root)
        return root

    def xmlchildren(self, root: _Element) -> None:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        for c in self.children:
            c.xmlelement(root)

    def append(self, element: Union[Self, Iterable[Self]]) -> Self:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        if isinstance(element, Iterable):
            self.children.extend(element)
        else:
            self.children.append(element)

        return self


class ValuedBaseElement(BaseElement):
    def __init__(self, value: Union[str, bytes, None] = None) -> None:
        super(ValuedBaseElement, self).__init__(value=value)


class Property(BaseElement):
    """
    An arbitrary property, named by a QName or a Clark name.  The value,
    if given, is literal inner XML.
    """

    def __init__(self, name, inner_xml: Optional[str] = None) -> None:
        super(Property, self).__init__()
        self.tag = etree.QName(name).text
        self.inner_xml = inner_xml
