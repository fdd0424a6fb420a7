"""
The registry maintains a map of provider config factories by name.
"""

import os
import sys
import logging
from importlib.metadata import entry_points
from typing import Callable, List, Union

from .config import ProviderConfig, OAuth1Config
from .exceptions import InvalidArgument
from .oauth import OAuth1Flow, OAuth2Flow

__all__ = ["create_provider", "create_provider_from_env", "get_provider", "known_providers", "register_provider",
           "create_flow"]

log = logging.getLogger(__name__)

AnyConfig = Union[ProviderConfig, OAuth1Config]
ProviderFactory = Callable[..., AnyConfig]

providers = {}


def register_provider(factory: ProviderFactory, name: str = None):
    """Add a provider factory to the registry, by default under the factory's own name"""
    providers[(name or factory.__name__).lower()] = factory


def discover_providers():
    """Loop through imported modules, and autoregister providers, including plugins"""
    for m in list(sys.modules):
        mod = sys.modules.get(m)
        if hasattr(mod, "__socialauth__"):
            if mod.__socialauth__.__name__.lower() not in providers:       # type: ignore
                register_provider(mod.__socialauth__)                      # type: ignore

    for entry_point in entry_points(group='socialauth.providers'):
        register_provider(entry_point.load(), entry_point.name)


def get_provider(name: str) -> ProviderFactory:
    """Get a provider factory with the given name"""
    name = name.lower()
    if name not in providers:
        discover_providers()

    if name not in providers:
        raise InvalidArgument("%s not a registered provider, known providers are: %s" % (name, known_providers()))

    return providers[name]


def create_provider(name: str, *args, **kws) -> AnyConfig:
    """Construct a provider config"""
    return get_provider(name)(*args, **kws)


def create_provider_from_env(name: str, prefix: str = None, **kws) -> AnyConfig:
    """
    Construct a provider config with credentials from the environment.

    Reads {PREFIX}_CLIENT_ID, {PREFIX}_CLIENT_SECRET and, optionally, comma separated {PREFIX}_SCOPES.
    The prefix defaults to the upper-cased provider name.
    """
    prefix = prefix or name.upper()
    scopes = os.environ.get("%s_SCOPES" % prefix)
    if scopes is not None:
        kws["scopes"] = [s.strip() for s in scopes.split(",") if s.strip()]
    log.debug("provider %s from env %s_*", name, prefix)
    return create_provider(name, os.environ.get("%s_CLIENT_ID" % prefix), os.environ.get("%s_CLIENT_SECRET" % prefix),
                           **kws)


def known_providers() -> List[str]:
    """List all known provider names, sorted order."""
    discover_providers()
    return list(sorted(providers.keys()))


def create_flow(config: AnyConfig, **kws):
    """OAuth1Flow or OAuth2Flow, depending on the config.  Keywords go to the flow."""
    if isinstance(config, OAuth1Config):
        return OAuth1Flow(config, **kws)
    if isinstance(config, ProviderConfig):
        return OAuth2Flow(config, **kws)
    raise InvalidArgument("not a provider config: %r" % (config,))
