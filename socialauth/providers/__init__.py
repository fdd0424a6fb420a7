"""
Built-in provider configs.  Each is a plain factory: client id and secret in, config out.
"""

from ..registry import register_provider

from .google import google
from .facebook import facebook
from .windowslive import windowslive
from .twitter import twitter

__all__ = ["google", "facebook", "windowslive", "twitter"]

for _factory in (google, facebook, windowslive, twitter):
    register_provider(_factory)
