#!/usr/bin/env python
import logging

__version__ = "0.1.0"

from .davclient import WebDAVClient, get_davclient

# Silence notification of no default logging handler
log = logging.getLogger("webdav_client")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = ["__version__", "WebDAVClient", "get_davclient"]
