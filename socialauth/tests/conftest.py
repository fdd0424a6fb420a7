import pytest

import socialauth
from socialauth import ProviderConfig, OAuth1Config, TokenPlacement

from .fixtures import StubServer

socialauth.logger.setLevel("TRACE")


@pytest.fixture
def stub():
    with StubServer() as srv:
        yield srv


@pytest.fixture
def config(stub):
    # authorize endpoint never gets hit, only built into urls, so it can stay https
    return ProviderConfig(
        name="Stub",
        client_id="cid",
        client_secret="csecret",
        authorize_endpoint="https://stub.example/o/oauth2/auth",
        token_endpoint=stub.uri("/token"),
        userinfo_endpoint=stub.uri("/userinfo"),
        scopes=["profile", "email"],
        token_placement=TokenPlacement.QUERY,
    )


@pytest.fixture
def oauth1_config(stub):
    return OAuth1Config(
        name="StubOne",
        consumer_key="ckey",
        consumer_secret="csecret",
        request_token_endpoint=stub.uri("/oauth/request_token"),
        authorize_endpoint="https://stub.example/oauth/authenticate",
        access_token_endpoint=stub.uri("/oauth/access_token"),
        userinfo_endpoint=stub.uri("/verify_credentials.json"),
        field_map={"id": "id_str", "name": "name", "user_name": "screen_name", "locale": "lang",
                   "picture_url": "profile_image_url"},
    )
