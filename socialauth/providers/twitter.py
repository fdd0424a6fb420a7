"""
Twitter, OAuth 1.0a.  Le sigh.
"""

from ..config import OAuth1Config

__all__ = ["twitter"]

BASE_URL = "https://api.twitter.com"

FIELD_MAP = {
    "id": "id_str",
    "name": "name",
    "locale": "lang",
    "picture_url": "profile_image_url",
    "user_name": "screen_name",
}


def twitter(consumer_key: str, consumer_secret: str, scopes=None, **kws) -> OAuth1Config:  # pylint: disable=unused-argument
    """Twitter provider config.  OAuth 1.0a has no scopes, the argument is accepted for symmetry."""
    settings = dict(
        name="Twitter",
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        request_token_endpoint=BASE_URL + "/oauth/request_token",
        authorize_endpoint=BASE_URL + "/oauth/authenticate",
        access_token_endpoint=BASE_URL + "/oauth/access_token",
        userinfo_endpoint=BASE_URL + "/1.1/account/verify_credentials.json",
        field_map=FIELD_MAP,
    )
    settings.update(kws)
    return OAuth1Config(**settings)


__socialauth__ = twitter
