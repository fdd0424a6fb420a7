"""
Step 3 of the authorization code flow: fetch the profile, and normalize it.

map_user_information() is also the last step of the oauth1 flow.
"""

import logging
from typing import Any, Mapping, Optional

import requests

from ..config import ProviderConfig, TokenPlacement, FieldMap
from ..exceptions import InvalidArgument, ProviderProtocolError
from ..types import AccessToken, UserInformation, parse_gender
from ..utils import truncate
from .api import DEFAULT_TIMEOUT, api_call, parse_json

__all__ = ["UserInfoFetcher", "map_user_information", "lookup_path"]

log = logging.getLogger(__name__)


def lookup_path(payload: Mapping[str, Any], path: str) -> Any:
    """
    Walk a dotted path ("picture.data.url") into nested dicts.  None if any part is missing.
    """
    cur: Any = payload
    for part in path.split("."):
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(part)
        if cur is None:
            return None
    return cur


def _as_str(val: Any) -> Optional[str]:
    if val is None or isinstance(val, (dict, list)):
        return None
    if isinstance(val, bool):
        return None
    val = str(val)
    return val or None


def map_user_information(payload: Mapping[str, Any], field_map: FieldMap, provider: str = "provider") -> UserInformation:
    """
    Project a vendor profile payload onto UserInformation using the field map.

    Raises ProviderProtocolError if the id is missing or empty.
    """
    values = {}
    for attr, path in field_map.items():
        if not path:
            continue
        raw = lookup_path(payload, path)
        if attr == "gender":
            values[attr] = parse_gender(raw)
        else:
            values[attr] = _as_str(raw)

    if not values.get("id"):
        msg = "Unable to retrieve the user id from %s, the user may have denied the authorization." % provider
        raise ProviderProtocolError(msg, provider=provider)

    return UserInformation(**values)


class UserInfoFetcher:
    """
    Fetches the user's profile with one GET to the userinfo endpoint.

    Args:
        session: requests session to use, one is created if not provided
        timeout: per request timeout in seconds
        logger: where to log, defaults to this module's logger
    """
    def __init__(self, session: requests.Session = None, timeout: float = DEFAULT_TIMEOUT,
                 logger: logging.Logger = None):
        self._own_session = session is None
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._log = logger or log

    def close(self):
        """Closes the session, if this fetcher created it."""
        if self._own_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def fetch_user_info(self, config: ProviderConfig, access_token: AccessToken) -> UserInformation:
        """Returns UserInformation or raises a ProviderProtocolError"""
        if access_token is None or not access_token.token:
            raise InvalidArgument("%s: access token is required" % config.name)

        params = dict(config.userinfo_params)
        headers = {"Accept": "application/json"}
        if config.token_placement == TokenPlacement.QUERY:
            params[config.token_param] = access_token.token
        else:
            headers["Authorization"] = "Bearer " + access_token.token

        resp = api_call(self._session, "GET", config.userinfo_endpoint, provider=config.name,
                        what="user information", timeout=self._timeout, logger=self._log,
                        params=params, headers=headers)

        payload = parse_json(resp, provider=config.name, what="user information", logger=self._log)
        if payload is None:
            msg = "Retrieved %s user information but it was not a json object." % config.name
            self._log.error(msg)
            raise ProviderProtocolError(msg, provider=config.name, status_code=resp.status_code, body=resp.text)

        try:
            info = map_user_information(payload, config.field_map, config.name)
        except ProviderProtocolError as e:
            self._log.error(str(e))
            e.status_code = resp.status_code
            e.body = truncate(resp.text)
            raise

        self._log.debug("%s user id %s", config.name, info.id)
        return info
