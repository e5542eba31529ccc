#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from webdav_client.lib.namespace import nsmap
from webdav_client.lib.namespace import ns


# Operations
class Mkcalendar(BaseElement):
    tag: ClassVar[str] = ns("C", "mkcalendar")
    root_nsmap: ClassVar[dict] = {"C": nsmap["C"], "D": nsmap["D"]}


class CalendarMultiGet(BaseElement):
    tag: ClassVar[str] = ns("C", "calendar-multiget")
    root_nsmap: ClassVar[dict] = {"C": nsmap["C"], "D": nsmap["D"]}


# Properties
class SupportedCalendarComponentSet(BaseElement):
    tag: ClassVar[str] = ns("C", "supported-calendar-component-set")
