"""
OAuth 1.0a, three legged (twitter style).

    flow = OAuth1Flow(providers.twitter(key, secret))
    req = flow.start("https://myapp/callback", state=csrf_token)
    ... keep req.secret somewhere, redirect the user to req.authorization_url ...
    client = flow.complete_callback(request.args, request_token_secret=saved_secret)

Requests are HMAC-SHA1 signed by requests_oauthlib.  This is a separate flow from OAuth2Flow, the only
thing they share is the final profile normalization.
"""

import logging
from typing import Any, Mapping, Optional

import requests
from requests_oauthlib import OAuth1
from oauthlib.common import add_params_to_uri
from pystrict import strict

from ..config import OAuth1Config
from ..exceptions import AuthorizationDenied, InvalidArgument, MissingAuthorizationCode, ProviderProtocolError
from ..types import AccessToken, AuthenticatedClient, AuthorizationRequest, FlowState, RequestToken, \
    UserInformation
from ..utils import debug_sig, first_param
from .api import DEFAULT_TIMEOUT, api_call, parse_form, parse_json
from .userinfo import map_user_information

__all__ = ["OAuth1Flow"]

log = logging.getLogger(__name__)

DENIED_KEY = "denied"
OAUTH_TOKEN_KEY = "oauth_token"
OAUTH_TOKEN_SECRET_KEY = "oauth_token_secret"
OAUTH_VERIFIER_KEY = "oauth_verifier"


@strict  # pylint: disable=too-many-instance-attributes
class OAuth1Flow:
    """
    request token -> user authorizes -> verifier -> access token -> verify credentials

    Args:
        config: the provider
        session: requests session, one is created (and owned) by the flow if not provided
        timeout: per http call timeout, seconds
        logger: where to log, defaults to this module's logger
    """
    def __init__(self, config: OAuth1Config, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT, logger: Optional[logging.Logger] = None):
        if not isinstance(config, OAuth1Config):
            raise InvalidArgument("OAuth1Flow requires an OAuth1Config, got %s" % type(config).__name__)
        self.config = config
        self._log = logger or log
        self._timeout = timeout
        self._own_session = session is None
        self._session = session if session is not None else requests.Session()
        self._state = FlowState.AWAITING_CODE
        self._request: Optional[AuthorizationRequest] = None
        self._request_token: Optional[RequestToken] = None

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def request(self) -> Optional[AuthorizationRequest]:
        return self._request

    def _check_awaiting(self):
        if self._state != FlowState.AWAITING_CODE:
            raise RuntimeError("%s flow is already %s, start a new flow" % (self.config.name, self._state.value))

    def _call(self, method, url, what, auth, **kwargs):
        return api_call(self._session, method, url, provider=self.config.name, what=what, timeout=self._timeout,
                        logger=self._log, auth=auth, **kwargs)

    def _protocol_error(self, msg, resp=None):
        self._log.error(msg)
        return ProviderProtocolError(msg, provider=self.config.name,
                                     status_code=resp.status_code if resp is not None else None,
                                     body=resp.text if resp is not None else None)

    def start(self, callback_uri: str, state: Optional[str] = None) -> RequestToken:
        """
        Get a request token, and the url to send the user to.

        The state, if any, rides along on the callback uri.
        """
        self._check_awaiting()
        if not callback_uri:
            raise InvalidArgument("%s: a callback uri is required" % self.config.name)

        callback = add_params_to_uri(callback_uri, [("state", state)]) if state else callback_uri
        self._log.debug("%s retrieving the request token", self.config.name)

        auth = OAuth1(self.config.consumer_key, client_secret=self.config.consumer_secret, callback_uri=callback)
        resp = self._call("POST", self.config.request_token_endpoint, "a request token", auth)

        data = parse_form(resp)
        token = data.get(OAUTH_TOKEN_KEY)
        secret = data.get(OAUTH_TOKEN_SECRET_KEY)
        self._log.debug("%s request token %s, secret %s", self.config.name, debug_sig(token), debug_sig(secret))

        if not token or not secret:
            raise self._protocol_error("Retrieved a %s request token but it doesn't contain both the %s and %s "
                                       "parameters." % (self.config.name, OAUTH_TOKEN_KEY, OAUTH_TOKEN_SECRET_KEY),
                                       resp)

        url = add_params_to_uri(self.config.authorize_endpoint, [(OAUTH_TOKEN_KEY, token)])
        self._request = AuthorizationRequest(callback_uri=callback_uri, state=state)
        self._request_token = RequestToken(token=token, secret=secret, authorization_url=url)
        return self._request_token

    def _retrieve_verifier(self, query_parameters):
        denied = first_param(query_parameters, DENIED_KEY)
        if denied:
            msg = "Failed to accept the %s app authorization, authentication didn't proceed." % self.config.name
            self._log.error(msg)
            raise AuthorizationDenied(msg, error=DENIED_KEY)

        token = first_param(query_parameters, OAUTH_TOKEN_KEY)
        verifier = first_param(query_parameters, OAUTH_VERIFIER_KEY)
        self._log.debug("%s callback token %s, verifier %s", self.config.name, debug_sig(token), debug_sig(verifier))
        if not token or not verifier:
            msg = "No %s and %s parameters provided in the response query string from %s." % (
                OAUTH_TOKEN_KEY, OAUTH_VERIFIER_KEY, self.config.name)
            self._log.error(msg)
            raise MissingAuthorizationCode(msg)
        return token, verifier

    def _retrieve_access_token(self, token, verifier, request_token_secret) -> AccessToken:
        auth = OAuth1(self.config.consumer_key, client_secret=self.config.consumer_secret,
                      resource_owner_key=token, resource_owner_secret=request_token_secret, verifier=verifier)
        resp = self._call("POST", self.config.access_token_endpoint, "an access token", auth)

        data = parse_form(resp)
        access_token = data.get(OAUTH_TOKEN_KEY)
        access_secret = data.get(OAUTH_TOKEN_SECRET_KEY)
        if not access_token or not access_secret:
            raise self._protocol_error("Retrieved a %s access token but it doesn't contain both the %s and %s "
                                       "parameters." % (self.config.name, OAUTH_TOKEN_KEY, OAUTH_TOKEN_SECRET_KEY),
                                       resp)
        self._log.debug("%s access token %s", self.config.name, debug_sig(access_token))
        return AccessToken(token=access_token, secret=access_secret)

    def _verify_credentials(self, access_token: AccessToken) -> UserInformation:
        auth = OAuth1(self.config.consumer_key, client_secret=self.config.consumer_secret,
                      resource_owner_key=access_token.token, resource_owner_secret=access_token.secret)
        resp = self._call("GET", self.config.userinfo_endpoint, "user information", auth)

        payload = parse_json(resp, provider=self.config.name, what="user information", logger=self._log)
        if payload is None:
            raise self._protocol_error("Retrieved %s user information but it was not a json object."
                                       % self.config.name, resp)
        try:
            return map_user_information(payload, self.config.field_map, self.config.name)
        except ProviderProtocolError as e:
            raise self._protocol_error(str(e), resp)

    def complete_callback(self, query_parameters: Mapping[str, Any],
                          request_token_secret: Optional[str] = None) -> AuthenticatedClient:
        """
        Finish the login with the query parameters the provider redirected back with.

        Args:
            query_parameters: the callback's query, as a dict of strings or parse_qs style lists
            request_token_secret: the secret from start(), defaults to the one this flow got, if any

        Raises:
            AuthorizationDenied: the user declined
            MissingAuthorizationCode: no oauth_token/oauth_verifier in the callback
            ProviderProtocolError: the access token or profile request failed
        """
        self._check_awaiting()
        try:
            token, verifier = self._retrieve_verifier(query_parameters)

            if request_token_secret is None and self._request_token and self._request_token.token == token:
                request_token_secret = self._request_token.secret

            self._state = FlowState.EXCHANGING_TOKEN
            access_token = self._retrieve_access_token(token, verifier, request_token_secret)

            self._state = FlowState.FETCHING_PROFILE
            info = self._verify_credentials(access_token)
        except Exception:
            self._state = FlowState.FAILED
            raise
        finally:
            self._request_token = None
            if self._own_session:
                self._session.close()

        self._state = FlowState.COMPLETE
        self._log.info("%s authenticated user %s", self.config.name, info.id)
        return AuthenticatedClient(provider_name=self.config.name.lower(), user_information=info,
                                   access_token=access_token)
