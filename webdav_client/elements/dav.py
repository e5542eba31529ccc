#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from .base import ValuedBaseElement
from webdav_client.lib.namespace import ns


# Operations
class Propfind(BaseElement):
    tag: ClassVar[str] = ns("D", "propfind")


class PropertyUpdate(BaseElement):
    tag: ClassVar[str] = ns("D", "propertyupdate")


class Mkcol(BaseElement):
    tag: ClassVar[str] = ns("D", "mkcol")


class LockInfo(BaseElement):
    tag: ClassVar[str] = ns("D", "lockinfo")


# Propfind / proppatch blocks
class Allprop(BaseElement):
    tag: ClassVar[str] = ns("D", "allprop")


class Prop(BaseElement):
    tag: ClassVar[str] = ns("D", "prop")


class Include(BaseElement):
    tag: ClassVar[str] = ns("D", "include")


class Set(BaseElement):
    tag: ClassVar[str] = ns("D", "set")


class Remove(BaseElement):
    tag: ClassVar[str] = ns("D", "remove")


class Href(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "href")


# Locking
class LockScope(BaseElement):
    tag: ClassVar[str] = ns("D", "lockscope")


class Exclusive(BaseElement):
    tag: ClassVar[str] = ns("D", "exclusive")


class Shared(BaseElement):
    tag: ClassVar[str] = ns("D", "shared")


class LockType(BaseElement):
    tag: ClassVar[str] = ns("D", "locktype")


class Write(BaseElement):
    tag: ClassVar[str] = ns("D", "write")


class Owner(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "owner")


class LockDiscovery(BaseElement):
    tag: ClassVar[str] = ns("D", "lockdiscovery")


# Properties
class ResourceType(BaseElement):
    tag: ClassVar[str] = ns("D", "resourcetype")


class DisplayName(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "displayname")


class GetContentLanguage(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontentlanguage")


class GetContentLength(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontentlength")


class GetContentType(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getcontenttype")


class GetEtag(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getetag")


class GetLastModified(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "getlastmodified")


class CreationDate(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "creationdate")


class IsCollection(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "iscollection")


class IsHidden(ValuedBaseElement):
    tag: ClassVar[str] = ns("D", "ishidden")
