#!/usr/bin/env python
import logging
import os
from collections import defaultdict
from typing import Dict
from typing import Optional
from typing import Type

from webdav_client import __version__

## Environmental variables prepended with "PYTHON_WEBDAV" are used for
## debug purposes, the ones prepended with "WEBDAV_" are for connection
## parameters.  Debug mode is one of DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_WEBDAV_DEBUGMODE")
if not debugmode:
    if "dev" in __version__ or __version__ == "(unknown)":
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("webdav_client")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def weirdness(*reasons) -> None:
    """Log a deviation from what a well-behaved server would send"""
    from webdav_client.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")


class DAVError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class AuthorizationError(DAVError):
    """
    The server answered 401 or 403.  The url property will contain the
    url in question, the reason property will contain the excuse the
    server sent.
    """

    pass


class ProppatchError(DAVError):
    pass


class PropfindError(DAVError):
    pass


class ReportError(DAVError):
    pass


class MkcolError(DAVError):
    pass


class MkcalendarError(DAVError):
    pass


class LockError(DAVError):
    pass


class UnlockError(DAVError):
    pass


class CopyError(DAVError):
    pass


class MoveError(DAVError):
    pass


class GetError(DAVError):
    pass


class PutError(DAVError):
    pass


class DeleteError(DAVError):
    pass


class OptionsError(DAVError):
    pass


class NotFoundError(DAVError):
    pass


class ResponseError(DAVError):
    pass


exception_by_method: Dict[str, Type[DAVError]] = defaultdict(lambda: DAVError)
for method in (
    "delete",
    "get",
    "put",
    "copy",
    "move",
    "lock",
    "unlock",
    "mkcalendar",
    "mkcol",
    "report",
    "propfind",
    "proppatch",
    "options",
):
    exception_by_method[method] = locals()[method[0].upper() + method[1:] + "Error"]
