"""
Step 1 of the authorization code flow: where to send the user.
"""

import logging
from typing import Optional, Sequence

from oauthlib.oauth2 import WebApplicationClient, InsecureTransportError

from ..config import ProviderConfig
from ..exceptions import InvalidArgument
from ..log import TRACE

__all__ = ["build_authorization_url"]

log = logging.getLogger(__name__)


def build_authorization_url(config: ProviderConfig, callback_uri: str, state: Optional[str] = None,
                            scopes: Optional[Sequence[str]] = None) -> str:
    """
    Build the url the user is redirected to, in order to grant access.

    Args:
        config: the provider
        callback_uri: where the provider sends the user back to, url encoded into redirect_uri
        state: opaque value echoed back in the callback, omitted if empty
        scopes: overrides config.scopes, joined with config.scope_separator, omitted if empty

    No I/O is done here.
    """
    if not callback_uri:
        raise InvalidArgument("%s: a callback uri is required to build the authorization url" % config.name)

    if scopes is None:
        scopes = config.scopes
    if isinstance(scopes, str):
        scopes = [scopes]

    # oauthlib would space-join a list, pre-joining lets comma providers work too
    scope = config.scope_separator.join(scopes) if scopes else None

    client = WebApplicationClient(config.client_id)
    try:
        url = client.prepare_request_uri(config.authorize_endpoint, redirect_uri=callback_uri, scope=scope,
                                         state=state or None, **config.authorize_params)
    except InsecureTransportError as e:
        raise InvalidArgument("%s: authorize endpoint must be https: %s" % (config.name, config.authorize_endpoint),
                              original_exception=e)

    log.log(TRACE, "%s authorization url %s", config.name, url)
    return url
