"""
Microsoft account (Windows Live), OAuth 2.
"""

from typing import Optional, Sequence

from ..config import ProviderConfig, TokenPlacement

__all__ = ["windowslive"]

DEFAULT_SCOPES = ("wl.signin", "wl.basic", "wl.emails")

FIELD_MAP = {
    "id": "id",
    "name": "name",
    "email": "emails.preferred",
    "locale": "locale",
    "user_name": "first_name",
    "gender": "gender",
}


def windowslive(client_id: str, client_secret: str, scopes: Optional[Sequence[str]] = None,
                **kws) -> ProviderConfig:
    settings = dict(
        name="WindowsLive",
        client_id=client_id,
        client_secret=client_secret,
        authorize_endpoint="https://login.live.com/oauth20_authorize.srf",
        token_endpoint="https://login.live.com/oauth20_token.srf",
        userinfo_endpoint="https://apis.live.net/v5.0/me",
        scopes=DEFAULT_SCOPES if scopes is None else scopes,
        token_placement=TokenPlacement.QUERY,
        field_map=FIELD_MAP,
    )
    settings.update(kws)
    return ProviderConfig(**settings)


__socialauth__ = windowslive
