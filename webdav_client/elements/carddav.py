#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from webdav_client.lib.namespace import nsmap
from webdav_client.lib.namespace import ns


# Operations
class AddressbookMultiGet(BaseElement):
    tag: ClassVar[str] = ns("CR", "addressbook-multiget")
    root_nsmap: ClassVar[dict] = {"C": nsmap["CR"], "D": nsmap["D"]}
