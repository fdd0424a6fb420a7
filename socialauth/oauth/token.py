"""
Step 2 of the authorization code flow: trade the code for an access token.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import requests
from oauthlib.oauth2 import WebApplicationClient

from ..config import ProviderConfig
from ..exceptions import InvalidArgument, ProviderProtocolError
from ..types import AccessToken
from ..utils import debug_sig
from .api import DEFAULT_TIMEOUT, api_call, parse_json, parse_form

__all__ = ["TokenExchanger"]

log = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
EXPIRES_IN_KEY = "expires_in"
TOKEN_TYPE_KEY = "token_type"


def _expires_in(data: Dict[str, Any]) -> int:
    try:
        val = int(data.get(EXPIRES_IN_KEY))
    except (TypeError, ValueError, OverflowError):
        return 0
    return val


class TokenExchanger:
    """
    Exchanges an authorization code for an AccessToken with one POST to the token endpoint.

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
        """Closes the session, if this exchanger created it."""
        if self._own_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def exchange(self, config: ProviderConfig, authorization_code: str, redirect_uri: str) -> AccessToken:
        """
        Returns an AccessToken or raises a ProviderProtocolError.

        The redirect_uri must be the same one that was used to build the authorization url.
        """
        if not authorization_code:
            raise InvalidArgument("%s: authorization code is required" % config.name)
        if not redirect_uri:
            raise InvalidArgument("%s: redirect uri is required" % config.name)

        client = WebApplicationClient(config.client_id)
        body = client.prepare_request_body(code=authorization_code, redirect_uri=redirect_uri,
                                           include_client_id=True, client_secret=config.client_secret)

        self._log.debug("%s exchanging code %s for a token", config.name, debug_sig(authorization_code))

        resp = api_call(self._session, "POST", config.token_endpoint, provider=config.name, what="an access token",
                        timeout=self._timeout, logger=self._log, data=body,
                        headers={"Content-Type": "application/x-www-form-urlencoded",
                                 "Accept": "application/json"})

        data = parse_json(resp, provider=config.name, what="access token", logger=self._log)
        if data is None:
            # some vendors still answer form encoded
            data = parse_form(resp)

        token = data.get(ACCESS_TOKEN_KEY)
        expires_in = _expires_in(data)
        token_type = data.get(TOKEN_TYPE_KEY)

        if not token or not isinstance(token, str) or expires_in <= 0 or not token_type:
            msg = "Retrieved a %s access token response but it doesn't contain one or more of: %s, %s or %s." % (
                config.name, ACCESS_TOKEN_KEY, EXPIRES_IN_KEY, TOKEN_TYPE_KEY)
            self._log.error(msg)
            raise ProviderProtocolError(msg, provider=config.name, status_code=resp.status_code, body=resp.text)

        try:
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        except OverflowError as e:
            msg = "Retrieved a %s access token that expires too far in the future: %s=%s" % (
                config.name, EXPIRES_IN_KEY, expires_in)
            self._log.error(msg)
            raise ProviderProtocolError(msg, provider=config.name, status_code=resp.status_code, body=resp.text,
                                        original_exception=e)

        self._log.debug("%s access token %s, expires %s", config.name, debug_sig(token), expires_at)
        return AccessToken(token=token, expires_at=expires_at, token_type=str(token_type))
