"""
The OAuth 2 authorization code flow, start to finish.

    flow = OAuth2Flow(providers.google(client_id, client_secret))
    url = flow.start("https://myapp/callback", state=csrf_token)
    ... redirect the user to url, wait for the callback ...
    client = flow.complete_callback(request.args)
    client.user_information.email

One flow per login attempt.  Flows do not retry, any failure aborts the attempt and the caller starts over.
"""

import logging
from typing import Any, Mapping, Optional

import requests
from pystrict import strict

from ..config import ProviderConfig
from ..exceptions import AuthorizationDenied, InvalidArgument, MissingAuthorizationCode
from ..types import AuthenticatedClient, AuthorizationRequest, FlowState
from ..utils import debug_sig, first_param
from .api import DEFAULT_TIMEOUT
from .authorize import build_authorization_url
from .token import TokenExchanger
from .userinfo import UserInfoFetcher

__all__ = ["OAuth2Flow", "retrieve_authorization_code"]

log = logging.getLogger(__name__)


def retrieve_authorization_code(config: ProviderConfig, query_parameters: Mapping[str, Any],
                                logger: logging.Logger = None) -> str:
    """
    Pull the code out of the callback query, or raise AuthorizationDenied / MissingAuthorizationCode.
    """
    logger = logger or log
    error = first_param(query_parameters, "error")
    if error:
        description = first_param(query_parameters, "error_description")
        msg = "Failed to retrieve an authorization code from %s. The error provided is: %s" % (config.name, error)
        if description:
            msg += " (%s)" % description
        logger.error(msg)
        raise AuthorizationDenied(msg, error=error, description=description)

    code = first_param(query_parameters, "code")
    if not code:
        msg = "No code parameter provided in the response query string from %s." % config.name
        logger.error(msg)
        raise MissingAuthorizationCode(msg)

    logger.debug("%s auth code %s", config.name, debug_sig(code))
    return code


@strict  # pylint: disable=too-many-instance-attributes
class OAuth2Flow:
    """
    Drives AuthorizationUrl -> TokenExchanger -> UserInfoFetcher for one provider config.

    Args:
        config: the provider
        session: requests session, one is created (and owned) by the flow if not provided
        timeout: per http call timeout, seconds
        logger: where to log, defaults to this module's logger
    """
    def __init__(self, config: ProviderConfig, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT, logger: Optional[logging.Logger] = None):
        if not isinstance(config, ProviderConfig):
            raise InvalidArgument("OAuth2Flow requires a ProviderConfig, got %s" % type(config).__name__)
        self.config = config
        self._log = logger or log
        self._own_session = session is None
        self._session = session if session is not None else requests.Session()
        self._exchanger = TokenExchanger(self._session, timeout=timeout, logger=self._log)
        self._fetcher = UserInfoFetcher(self._session, timeout=timeout, logger=self._log)
        self._state = FlowState.AWAITING_CODE
        self._request: Optional[AuthorizationRequest] = None

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def request(self) -> Optional[AuthorizationRequest]:
        """The AuthorizationRequest recorded by start(), if any"""
        return self._request

    def _check_awaiting(self):
        if self._state != FlowState.AWAITING_CODE:
            raise RuntimeError("%s flow is already %s, start a new flow" % (self.config.name, self._state.value))

    def start(self, callback_uri: str, state: Optional[str] = None) -> str:
        """
        Returns the url to send the user to.  No network calls are made.
        """
        self._check_awaiting()
        url = build_authorization_url(self.config, callback_uri, state)
        self._request = AuthorizationRequest(callback_uri=callback_uri, state=state)
        self._log.debug("%s start oauth, redir %s", self.config.name, callback_uri)
        return url

    def complete_callback(self, query_parameters: Mapping[str, Any],
                          redirect_uri: Optional[str] = None) -> AuthenticatedClient:
        """
        Finish the login with the query parameters the provider redirected back with.

        Args:
            query_parameters: the callback's query, as a dict of strings or parse_qs style lists
            redirect_uri: must match the callback uri used in start(), defaults to it

        Raises:
            AuthorizationDenied: the provider sent back an error
            MissingAuthorizationCode: no code in the callback
            ProviderProtocolError: the token exchange or profile fetch failed
        """
        self._check_awaiting()
        try:
            code = retrieve_authorization_code(self.config, query_parameters, self._log)

            redirect_uri = redirect_uri or (self._request.callback_uri if self._request else None)
            if not redirect_uri:
                raise InvalidArgument("%s: redirect uri is required to complete the callback" % self.config.name)

            self._state = FlowState.EXCHANGING_TOKEN
            token = self._exchanger.exchange(self.config, code, redirect_uri)

            self._state = FlowState.FETCHING_PROFILE
            info = self._fetcher.fetch_user_info(self.config, token)
        except Exception:
            self._state = FlowState.FAILED
            raise
        finally:
            if self._own_session:
                self._session.close()

        self._state = FlowState.COMPLETE
        self._log.info("%s authenticated user %s", self.config.name, info.id)
        return AuthenticatedClient(provider_name=self.config.name.lower(), user_information=info,
                                   access_token=token)
