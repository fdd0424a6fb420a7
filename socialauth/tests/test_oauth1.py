import logging
from urllib.parse import urlparse, parse_qs
from unittest.mock import MagicMock

import pytest

from socialauth import OAuth1Flow, FlowState, AuthorizationDenied, MissingAuthorizationCode, ProviderProtocolError, \
    InvalidArgument

from .fixtures import StubError

log = logging.getLogger(__name__)

CALLBACK = "https://myapp.example/auth/twitter"


def oauth_header(hit):
    auth = hit.headers.get("authorization", "")
    assert auth.startswith("OAuth ")
    return auth


@pytest.fixture
def twitter(stub):
    stub.add_route("/oauth/request_token",
                   lambda hit: "oauth_token=req-tok&oauth_token_secret=req-sec&oauth_callback_confirmed=true",
                   content_type="text/html")
    stub.add_route("/oauth/access_token",
                   lambda hit: "oauth_token=acc-tok&oauth_token_secret=acc-sec&user_id=99&screen_name=jane",
                   content_type="text/html")
    stub.add_route("/verify_credentials.json",
                   lambda hit: {"id": 99, "id_str": "99", "name": "Jane", "screen_name": "jane", "lang": "en",
                                "profile_image_url": "http://pbs/jane.png"})
    return stub


def test_end_to_end(twitter, oauth1_config):
    flow = OAuth1Flow(oauth1_config)
    req = flow.start(CALLBACK, "csrf")

    assert req.token == "req-tok"
    assert req.secret == "req-sec"
    assert parse_qs(urlparse(req.authorization_url).query) == {"oauth_token": ["req-tok"]}
    assert req.authorization_url.startswith("https://stub.example/oauth/authenticate?")

    hit, = twitter.hits_for("/oauth/request_token")
    assert hit.method == "POST"
    auth = oauth_header(hit)
    assert 'oauth_consumer_key="ckey"' in auth
    assert "oauth_signature=" in auth
    assert 'oauth_signature_method="HMAC-SHA1"' in auth
    # state rides along on the callback
    assert "oauth_callback=" in auth and "state%3Dcsrf" in auth

    client = flow.complete_callback({"oauth_token": "req-tok", "oauth_verifier": "ver"})

    assert flow.state == FlowState.COMPLETE
    assert client.provider_name == "stubone"
    info = client.user_information
    assert (info.id, info.name, info.user_name, info.locale) == ("99", "Jane", "jane", "en")
    assert info.picture_url == "http://pbs/jane.png"
    assert client.access_token.token == "acc-tok"
    assert client.access_token.secret == "acc-sec"
    assert client.access_token.expires_at is None

    hit, = twitter.hits_for("/oauth/access_token")
    auth = oauth_header(hit)
    assert 'oauth_token="req-tok"' in auth
    assert 'oauth_verifier="ver"' in auth

    hit, = twitter.hits_for("/verify_credentials.json")
    assert hit.method == "GET"
    assert 'oauth_token="acc-tok"' in oauth_header(hit)


def test_callback_in_new_flow(twitter, oauth1_config):
    # web apps complete on a different request, with the secret they stashed
    req = OAuth1Flow(oauth1_config).start(CALLBACK)
    flow = OAuth1Flow(oauth1_config)
    client = flow.complete_callback({"oauth_token": [req.token], "oauth_verifier": ["ver"]},
                                    request_token_secret=req.secret)
    assert client.user_information.id == "99"


def test_denied(oauth1_config):
    session = MagicMock()
    flow = OAuth1Flow(oauth1_config, session=session)
    with pytest.raises(AuthorizationDenied) as e:
        flow.complete_callback({"denied": "req-tok"})
    assert "StubOne" in str(e.value)
    assert flow.state == FlowState.FAILED
    session.request.assert_not_called()


@pytest.mark.parametrize("params", [{}, {"oauth_token": "t"}, {"oauth_verifier": "v"},
                                    {"oauth_token": "", "oauth_verifier": "v"}])
def test_missing_verifier(oauth1_config, params):
    session = MagicMock()
    flow = OAuth1Flow(oauth1_config, session=session)
    with pytest.raises(MissingAuthorizationCode):
        flow.complete_callback(params)
    session.request.assert_not_called()


def test_bad_request_token(stub, oauth1_config):
    stub.add_route("/oauth/request_token", lambda hit: "oauth_token=only", content_type="text/html")
    flow = OAuth1Flow(oauth1_config)
    with pytest.raises(ProviderProtocolError) as e:
        flow.start(CALLBACK)
    assert e.value.status_code == 200


def test_request_token_rejected(stub, oauth1_config):
    def fail(hit):
        raise StubError(401, "Callback URL not approved for this client application")
    stub.add_route("/oauth/request_token", fail)
    with pytest.raises(ProviderProtocolError) as e:
        OAuth1Flow(oauth1_config).start(CALLBACK)
    assert e.value.status_code == 401
    assert "not approved" in e.value.body


def test_access_token_incomplete(twitter, oauth1_config):
    twitter.add_route("/oauth/access_token", lambda hit: "oauth_token=acc-tok", content_type="text/html")
    flow = OAuth1Flow(oauth1_config)
    flow.start(CALLBACK)
    with pytest.raises(ProviderProtocolError):
        flow.complete_callback({"oauth_token": "req-tok", "oauth_verifier": "ver"})
    assert flow.state == FlowState.FAILED
    assert not twitter.hits_for("/verify_credentials.json")


def test_verify_credentials_without_id(twitter, oauth1_config):
    twitter.add_route("/verify_credentials.json", lambda hit: {"name": "Jane"})
    flow = OAuth1Flow(oauth1_config)
    flow.start(CALLBACK)
    with pytest.raises(ProviderProtocolError) as e:
        flow.complete_callback({"oauth_token": "req-tok", "oauth_verifier": "ver"})
    assert e.value.status_code == 200


def test_empty_callback(oauth1_config):
    session = MagicMock()
    with pytest.raises(InvalidArgument):
        OAuth1Flow(oauth1_config, session=session).start("")
    session.request.assert_not_called()


def test_single_use(twitter, oauth1_config):
    flow = OAuth1Flow(oauth1_config)
    flow.start(CALLBACK)
    flow.complete_callback({"oauth_token": "req-tok", "oauth_verifier": "ver"})
    with pytest.raises(RuntimeError):
        flow.complete_callback({"oauth_token": "req-tok", "oauth_verifier": "ver"})


def test_wrong_config_type(config):
    with pytest.raises(InvalidArgument):
        OAuth1Flow(config)
