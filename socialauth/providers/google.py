"""
Google, OAuth 2.

REFERENCE: https://developers.google.com/identity/protocols/oauth2/web-server
"""

from typing import Optional, Sequence

from ..config import ProviderConfig, TokenPlacement

__all__ = ["google"]

DEFAULT_SCOPES = (
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/userinfo.email",
)

FIELD_MAP = {
    "id": "id",
    "name": "name",
    "email": "email",
    "locale": "locale",
    "picture_url": "picture",
    "user_name": "given_name",
    "gender": "gender",
}


def google(client_id: str, client_secret: str, scopes: Optional[Sequence[str]] = None, **kws) -> ProviderConfig:
    """Google provider config.  Keyword args override any of the defaults."""
    settings = dict(
        name="Google",
        client_id=client_id,
        client_secret=client_secret,
        authorize_endpoint="https://accounts.google.com/o/oauth2/auth",
        token_endpoint="https://accounts.google.com/o/oauth2/token",
        userinfo_endpoint="https://www.googleapis.com/oauth2/v2/userinfo",
        scopes=DEFAULT_SCOPES if scopes is None else scopes,
        scope_separator=" ",
        token_placement=TokenPlacement.QUERY,
        field_map=FIELD_MAP,
    )
    settings.update(kws)
    return ProviderConfig(**settings)


__socialauth__ = google
