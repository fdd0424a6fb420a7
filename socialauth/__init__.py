"""

socialauth lets a web application log users in with a third-party identity provider

External modules:

socialauth.OAuth2Flow
socialauth.OAuth1Flow
socialauth.providers

Example:

import socialauth

config = socialauth.providers.google(client_id, client_secret)
flow = socialauth.OAuth2Flow(config)

# step 1, send the user off
url = flow.start("https://myapp.example/callback", state=csrf_token)

# step 2 and 3, the provider sent them back
client = flow.complete_callback(request.args)
print("logged in %s <%s>" % (client.user_information.name, client.user_information.email))
"""

__version__ = "0.1.0"

# must be imported before other socialauth imports
from .log import logger

# import modules into top level for convenience
from .exceptions import *
from .types import *
from .config import *
from .registry import *
from .oauth import *
from . import providers
