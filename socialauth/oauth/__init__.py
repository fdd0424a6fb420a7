"""
OAuth flows, and the individual steps they are built from
"""

from .api import DEFAULT_TIMEOUT
from .authorize import *
from .token import *
from .userinfo import *
from .flow import *
from .oauth1 import *

__all__ = ["DEFAULT_TIMEOUT", "build_authorization_url", "TokenExchanger", "UserInfoFetcher", "map_user_information",
           "lookup_path", "OAuth2Flow", "retrieve_authorization_code", "OAuth1Flow"]
