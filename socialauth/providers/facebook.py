"""
Facebook, OAuth 2 against the graph api.
"""

from typing import Optional, Sequence

from ..config import ProviderConfig, TokenPlacement

__all__ = ["facebook"]

DEFAULT_SCOPES = ("email",)

FIELD_MAP = {
    "id": "id",
    "name": "name",
    "email": "email",
    "locale": "locale",
    "picture_url": "picture.data.url",
    "user_name": "username",
    "gender": "gender",
}


def facebook(client_id: str, client_secret: str, scopes: Optional[Sequence[str]] = None, **kws) -> ProviderConfig:
    """Facebook provider config.  Facebook wants comma separated scopes."""
    settings = dict(
        name="Facebook",
        client_id=client_id,
        client_secret=client_secret,
        authorize_endpoint="https://www.facebook.com/dialog/oauth",
        token_endpoint="https://graph.facebook.com/oauth/access_token",
        userinfo_endpoint="https://graph.facebook.com/me",
        scopes=DEFAULT_SCOPES if scopes is None else scopes,
        scope_separator=",",
        token_placement=TokenPlacement.QUERY,
        field_map=FIELD_MAP,
        userinfo_params={"fields": "id,name,email,locale,gender,picture"},
    )
    settings.update(kws)
    return ProviderConfig(**settings)


__socialauth__ = facebook
