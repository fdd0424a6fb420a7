"""
Thin wrapper around requests, shared by every step that talks to a provider.

Transport errors and non-200 responses come out of here as ProviderProtocolError, nothing else leaks.
"""

import json
import logging
from urllib.parse import parse_qsl
from typing import Any, Dict, Optional

import requests

from ..exceptions import ProviderProtocolError
from ..log import TRACE
from ..utils import debug_args

__all__ = ["DEFAULT_TIMEOUT", "api_call", "parse_json", "parse_form"]

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


def api_call(session: requests.Session, method: str, url: str, *, provider: str, what: str,
             timeout: float = DEFAULT_TIMEOUT, logger: logging.Logger = None, **kwargs) -> requests.Response:
    """
    Issue a single request, no retries.

    Args:
        session: requests session (or anything with a request() method)
        method: http method
        url: endpoint
        provider: provider name, for messages
        what: what we are doing, for messages ("an access token")
        timeout: per call timeout, seconds
        logger: where to log, defaults to this module's logger
        kwargs: passed through to requests
    """
    logger = logger or log
    logger.log(TRACE, "%s %s %s endpoint: %s", provider, method, what, url)
    try:
        resp = session.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        msg = "Failed to obtain %s from %s: %s" % (what, provider, repr(e))
        logger.error(msg)
        raise ProviderProtocolError(msg, provider=provider, original_exception=e)

    if resp.status_code != 200:
        msg = "Failed to obtain %s from %s, the response was not 200 OK. Status: %s %s. Content: %s" % (
            what, provider, resp.status_code, resp.reason, debug_args(resp.text))
        logger.error(msg)
        raise ProviderProtocolError(msg, provider=provider, status_code=resp.status_code, body=resp.text)

    logger.log(TRACE, "%s %s -> %s, %d bytes", provider, what, resp.status_code, len(resp.content or b""))
    return resp


def parse_json(resp: requests.Response, *, provider: str, what: str,
               logger: logging.Logger = None) -> Optional[Dict[str, Any]]:
    """Json object out of a response, None if it's not json or not an object"""
    logger = logger or log
    try:
        data = json.loads(resp.text)
    except ValueError as e:
        logger.debug("%s %s: not json: %s", provider, what, e)
        return None
    if not isinstance(data, dict):
        return None
    return data


def parse_form(resp: requests.Response) -> Dict[str, str]:
    """Form encoded response body, as returned by oauth1 endpoints and some older oauth2 ones"""
    return dict(parse_qsl(resp.text or "", keep_blank_values=True))
