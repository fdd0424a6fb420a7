"""
The ubuquitous "misc utilities" file required in every library
"""

import logging

from base64 import b64encode
from typing import Any, List, Dict, Mapping, Optional
import xxhash

log = logging.getLogger(__name__)


MAX_DEBUG_STR = 64
MAX_BODY_STR = 512


def _debug_arg(val: Any):
    ret: Any = val
    if isinstance(val, dict):
        r: Dict[Any, Any] = {}
        for k, v in val.items():
            r[k] = _debug_arg(v)
        ret = r
    elif isinstance(val, str):
        if len(val) > MAX_DEBUG_STR:
            ret = val[0:MAX_DEBUG_STR - 3] + "..."
    elif isinstance(val, bytes):
        if len(val) > MAX_DEBUG_STR:
            ret = val[0:MAX_DEBUG_STR - 3] + b"..."
    else:
        try:
            rlist: List[Any] = []
            for v in iter(val):
                rlist.append(_debug_arg(v))
            ret = rlist
        except TypeError:
            pass
    return ret


def debug_args(*stuff: Any):
    """
    Use this when logging stuff that might be too long.  It truncates them.
    """
    if log.isEnabledFor(logging.DEBUG):
        r = _debug_arg(stuff)
        if len(r) == 1:
            return r[0]
        return tuple(r)
    if len(stuff) == 1:
        return "N/A"
    return tuple(["N/A"] * len(stuff))


def truncate(text: Optional[str], size: int = MAX_BODY_STR) -> Optional[str]:
    """Trim a response body down to a snippet that is safe to carry around in an exception."""
    if text is None or len(text) <= size:
        return text
    return text[0:size - 3] + "..."


# useful for converting tokens and codes into digestible nonces
def debug_sig(t: Any, size: int = 3) -> str:
    """
    Useful for converting tokens, codes and secrets into short digestible nonces, so they can be logged
    """
    if not t:
        return "0"
    th = xxhash.xxh64()
    th.update(str(t).encode("utf8"))
    return b64encode(th.digest()).decode("utf8")[0:size]


def first_param(params: Mapping[str, Any], key: str) -> Optional[str]:
    """
    Get a single value out of a callback query mapping.

    Accepts both plain dicts and the output of urllib.parse.parse_qs, where every value is a list.
    """
    if not params:
        return None
    val = params.get(key)
    if isinstance(val, (list, tuple)):
        val = val[0] if val else None
    if isinstance(val, bytes):
        val = val.decode("utf8")
    return val
