"""
Values of the WebDAV specific request headers (RFC 4918 section 10), and
parsing of the headers of an OPTIONS response.
"""

from datetime import timedelta
from typing import Dict, List, Optional, Tuple

from .types import ApplyTo, HTTPMethods


def _depth(apply_to, enum_class) -> str:
    if not isinstance(apply_to, enum_class):
        raise ValueError(f"{apply_to!r} is not a {enum_class.__qualname__} value")
    return apply_to.value


def depth_for_propfind(apply_to: ApplyTo.Propfind) -> str:
    return _depth(apply_to, ApplyTo.Propfind)


def depth_for_copy(apply_to: ApplyTo.Copy) -> str:
    return _depth(apply_to, ApplyTo.Copy)


def depth_for_lock(apply_to: ApplyTo.Lock) -> str:
    return _depth(apply_to, ApplyTo.Lock)


def if_header(*lock_tokens: Optional[str]) -> Optional[str]:
    """
    If header submitting the given lock tokens, one list per token.
    None if there are no tokens.
    """
    lists = [f"(<{token}>)" for token in lock_tokens if token]
    if not lists:
        return None
    return " ".join(lists)


def lock_token_header(lock_token: str) -> str:
    if not lock_token:
        raise ValueError("a lock token is required")
    return f"<{lock_token}>"


def timeout_header(timeout: timedelta) -> str:
    return f"Second-{int(timeout.total_seconds())}"


def overwrite_header(overwrite: bool) -> str:
    return "T" if overwrite else "F"


def translate_header(translate: bool) -> str:
    return "t" if translate else "f"


def _split_header(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [x.strip() for x in value.split(",") if x.strip()]


def parse_allow_header(value: Optional[str]) -> HTTPMethods:
    """
    Method names are matched ignoring case; names this library does not
    know are skipped.
    """
    ret = HTTPMethods.NONE
    for name in _split_header(value):
        ret |= HTTPMethods.__members__.get(name.upper(), HTTPMethods.NONE)
    return ret


def parse_options_headers(
    headers: Dict[str, str],
) -> Tuple[HTTPMethods, Tuple[str, ...]]:
    """
    Allowed methods and DAV compliance classes from the headers of an
    OPTIONS response.  A server supporting RFC 5689 announces
    ``extended-mkcol`` in the DAV header.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    allowed = parse_allow_header(lowered.get("allow"))
    dav_options = tuple(_split_header(lowered.get("dav")))
    if any(x.lower() == "extended-mkcol" for x in dav_options):
        allowed |= HTTPMethods.MKCOL_EXTENDED
    return allowed, dav_options
