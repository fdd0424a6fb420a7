import dataclasses

import pytest

from socialauth import ProviderConfig, OAuth1Config, TokenPlacement, InvalidArgument, DEFAULT_FIELD_MAP, providers


def make(**kws):
    settings = dict(name="Prov", client_id="id", client_secret="secret", authorize_endpoint="https://a/auth",
                    token_endpoint="https://a/token", userinfo_endpoint="https://a/me")
    settings.update(kws)
    return ProviderConfig(**settings)


def test_defaults():
    c = make(scopes=["a", "b"])
    assert c.scopes == ("a", "b")
    assert c.scope_separator == " "
    assert c.token_placement == TokenPlacement.HEADER
    assert dict(c.field_map) == dict(DEFAULT_FIELD_MAP)


@pytest.mark.parametrize("missing", ["name", "client_id", "client_secret", "authorize_endpoint",
                                     "token_endpoint", "userinfo_endpoint"])
def test_required(missing):
    with pytest.raises(InvalidArgument) as e:
        make(**{missing: ""})
    assert missing in str(e.value)


def test_immutable():
    c = make(authorize_params={"prompt": "consent"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.client_id = "other"                       # type: ignore
    with pytest.raises(TypeError):
        c.authorize_params["prompt"] = "none"       # type: ignore
    with pytest.raises(TypeError):
        c.field_map["id"] = "sub"                   # type: ignore


def test_caller_dicts_are_copied():
    params = {"fields": "id"}
    c = make(userinfo_params=params)
    params["fields"] = "id,name"
    assert c.userinfo_params["fields"] == "id"


def test_replace():
    c = make()
    d = dataclasses.replace(c, token_endpoint="https://b/token")
    assert d.token_endpoint == "https://b/token"
    assert c.token_endpoint == "https://a/token"


def test_bad_field_map():
    with pytest.raises(InvalidArgument):
        make(field_map={"name": "name"})
    with pytest.raises(InvalidArgument):
        make(field_map={"id": "id", "shoe_size": "shoe"})


def test_scopes_not_string():
    with pytest.raises(InvalidArgument):
        make(scopes="email")


def test_bad_placement():
    with pytest.raises(InvalidArgument):
        make(token_placement="query")


@pytest.mark.parametrize("key", ["response_type", "client_id", "redirect_uri", "state", "scope"])
def test_reserved_authorize_params(key):
    with pytest.raises(InvalidArgument) as e:
        make(authorize_params={"access_type": "offline", key: "x"})
    assert key in str(e.value)
    assert make(authorize_params={"access_type": "offline"}).authorize_params == {"access_type": "offline"}


def test_builtin_configs_construct():
    assert providers.google("a", "b").name == "Google"
    assert providers.facebook("a", "b").client_id == "a"
    assert providers.windowslive("a", "b").client_secret == "b"
    assert providers.twitter("a", "b").consumer_key == "a"


def test_from_env(monkeypatch):
    monkeypatch.setenv("PROV_CLIENT_ID", "envid")
    monkeypatch.setenv("PROV_CLIENT_SECRET", "envsecret")
    monkeypatch.setenv("PROV_SCOPES", "email, profile")
    c = ProviderConfig.from_env("PROV", name="Prov", authorize_endpoint="https://a/auth",
                                token_endpoint="https://a/token", userinfo_endpoint="https://a/me")
    assert c.client_id == "envid"
    assert c.client_secret == "envsecret"
    assert c.scopes == ("email", "profile")


def test_from_env_missing(monkeypatch):
    monkeypatch.delenv("NOPE_CLIENT_ID", raising=False)
    monkeypatch.delenv("NOPE_CLIENT_SECRET", raising=False)
    with pytest.raises(InvalidArgument):
        ProviderConfig.from_env("NOPE", name="Prov", authorize_endpoint="https://a/auth",
                                token_endpoint="https://a/token", userinfo_endpoint="https://a/me")


def test_oauth1_required():
    with pytest.raises(InvalidArgument):
        OAuth1Config(name="T", consumer_key="k", consumer_secret="", request_token_endpoint="https://t/r",
                     authorize_endpoint="https://t/a", access_token_endpoint="https://t/at",
                     userinfo_endpoint="https://t/me")


def test_oauth1_from_env(monkeypatch):
    monkeypatch.setenv("TW_CLIENT_ID", "k")
    monkeypatch.setenv("TW_CLIENT_SECRET", "s")
    c = OAuth1Config.from_env("TW", name="T", request_token_endpoint="https://t/r", authorize_endpoint="https://t/a",
                              access_token_endpoint="https://t/at", userinfo_endpoint="https://t/me")
    assert c.consumer_key == "k"
    assert c.consumer_secret == "s"
