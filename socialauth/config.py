"""
Static per-provider configuration.

Everything that differs between vendors lives here as data: endpoints, scope joining, where the access
token goes on the profile request and how the profile payload maps onto UserInformation.
"""

import os
import logging
from enum import Enum
from types import MappingProxyType
from dataclasses import dataclass, field, fields
from typing import Mapping, Sequence, Optional

from .exceptions import InvalidArgument
from .types import UserInformation

__all__ = ["ProviderConfig", "OAuth1Config", "TokenPlacement", "FieldMap", "DEFAULT_FIELD_MAP"]

log = logging.getLogger(__name__)

# UserInformation attribute -> dotted path into the vendor's json profile
FieldMap = Mapping[str, str]

DEFAULT_FIELD_MAP: FieldMap = MappingProxyType({
    "id": "id",
    "name": "name",
    "email": "email",
    "locale": "locale",
    "picture_url": "picture",
    "user_name": "username",
    "gender": "gender",
})

_USER_FIELDS = {f.name for f in fields(UserInformation)}

# built from the flow itself, never from static config
RESERVED_AUTHORIZE_PARAMS = frozenset(("response_type", "client_id", "redirect_uri", "state", "scope"))


class TokenPlacement(Enum):
    QUERY = "query"                 # ?access_token=...
    HEADER = "header"               # Authorization: Bearer ...


def _require(provider, **values):
    for k, v in values.items():
        if not v:
            raise InvalidArgument("%s: %s is required" % (provider or "provider", k))


def _freeze_field_map(name, field_map) -> FieldMap:
    unknown = set(field_map) - _USER_FIELDS
    if unknown:
        raise InvalidArgument("%s: unknown user information fields in field map: %s" % (name, sorted(unknown)))
    if not field_map.get("id"):
        raise InvalidArgument("%s: field map must say where the user id is" % name)
    return MappingProxyType(dict(field_map))


def _env_scopes(prefix) -> Optional[Sequence[str]]:
    scopes = os.environ.get("%s_SCOPES" % prefix)
    if scopes is None:
        return None
    return [s.strip() for s in scopes.split(",") if s.strip()]


@dataclass(frozen=True)                 # pylint: disable=too-many-instance-attributes
class ProviderConfig:
    """
    OAuth 2 provider settings.  Immutable, safe to share between flows.

    Args:
        name: provider name, used in error messages and as the AuthenticatedClient provider name
        client_id: also known as "app id", provided for your application by the identity provider
        client_secret: also known as "app secret"
        authorize_endpoint: where the user gets redirected to grant access
        token_endpoint: where the authorization code is exchanged for a token
        userinfo_endpoint: the profile endpoint
        scopes: default scopes requested
        scope_separator: most vendors use a space, some (facebook) use a comma
        token_placement: how the access token is sent to the profile endpoint
        token_param: query parameter name, when token_placement is QUERY
        field_map: UserInformation attribute -> dotted path into the profile payload
        authorize_params: extra static query parameters for the authorize url
        userinfo_params: extra static query parameters for the profile request
    """
    name: str
    client_id: str
    client_secret: str
    authorize_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    scopes: Sequence[str] = ()
    scope_separator: str = " "
    token_placement: TokenPlacement = TokenPlacement.HEADER
    token_param: str = "access_token"
    field_map: FieldMap = field(default_factory=lambda: DEFAULT_FIELD_MAP)
    authorize_params: Mapping[str, str] = field(default_factory=dict)
    userinfo_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        _require(self.name, name=self.name, client_id=self.client_id, client_secret=self.client_secret,
                 authorize_endpoint=self.authorize_endpoint, token_endpoint=self.token_endpoint,
                 userinfo_endpoint=self.userinfo_endpoint)
        if isinstance(self.scopes, str):
            raise InvalidArgument("%s: scopes must be a sequence of strings, not a string" % self.name)
        if not isinstance(self.token_placement, TokenPlacement):
            raise InvalidArgument("%s: bad token placement %r" % (self.name, self.token_placement))
        reserved = RESERVED_AUTHORIZE_PARAMS.intersection(self.authorize_params or {})
        if reserved:
            raise InvalidArgument("%s: authorize params may not override %s" % (self.name, sorted(reserved)))

        # frozen, so sneak past __setattr__
        object.__setattr__(self, "scopes", tuple(self.scopes or ()))
        object.__setattr__(self, "field_map", _freeze_field_map(self.name, self.field_map))
        object.__setattr__(self, "authorize_params", MappingProxyType(dict(self.authorize_params or {})))
        object.__setattr__(self, "userinfo_params", MappingProxyType(dict(self.userinfo_params or {})))

    @classmethod
    def from_env(cls, prefix: str, **kws) -> "ProviderConfig":
        """
        Build a config with client id, secret and (optionally) comma-separated scopes pulled from
        {PREFIX}_CLIENT_ID, {PREFIX}_CLIENT_SECRET and {PREFIX}_SCOPES.
        """
        kws.setdefault("client_id", os.environ.get("%s_CLIENT_ID" % prefix))
        kws.setdefault("client_secret", os.environ.get("%s_CLIENT_SECRET" % prefix))
        scopes = _env_scopes(prefix)
        if scopes is not None:
            kws["scopes"] = scopes
        log.debug("config from env %s_*", prefix)
        return cls(**kws)


@dataclass(frozen=True)
class OAuth1Config:
    """
    OAuth 1.0a provider settings (twitter style, three legged, HMAC-SHA1 signed).

    Args:
        name: provider name
        consumer_key: application key
        consumer_secret: application secret
        request_token_endpoint: temporary credentials endpoint
        authorize_endpoint: where the user gets redirected, receives oauth_token
        access_token_endpoint: exchanges the verifier for token credentials
        userinfo_endpoint: signed profile endpoint (verify_credentials)
        field_map: UserInformation attribute -> dotted path into the profile payload
    """
    name: str
    consumer_key: str
    consumer_secret: str
    request_token_endpoint: str
    authorize_endpoint: str
    access_token_endpoint: str
    userinfo_endpoint: str
    field_map: FieldMap = field(default_factory=lambda: DEFAULT_FIELD_MAP)

    def __post_init__(self):
        _require(self.name, name=self.name, consumer_key=self.consumer_key, consumer_secret=self.consumer_secret,
                 request_token_endpoint=self.request_token_endpoint, authorize_endpoint=self.authorize_endpoint,
                 access_token_endpoint=self.access_token_endpoint, userinfo_endpoint=self.userinfo_endpoint)
        object.__setattr__(self, "field_map", _freeze_field_map(self.name, self.field_map))

    @classmethod
    def from_env(cls, prefix: str, **kws) -> "OAuth1Config":
        """Build a config with the consumer key and secret from {PREFIX}_CLIENT_ID and {PREFIX}_CLIENT_SECRET."""
        kws.setdefault("consumer_key", os.environ.get("%s_CLIENT_ID" % prefix))
        kws.setdefault("consumer_secret", os.environ.get("%s_CLIENT_SECRET" % prefix))
        log.debug("config from env %s_*", prefix)
        return cls(**kws)
