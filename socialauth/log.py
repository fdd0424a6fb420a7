"""
Log initialization for socialauth.  Adds the 'TRACE' level to the logger, which
is used for per-request endpoint chatter and only shows while unit testing.
"""

# add TRACE named level, because libraries need it

import logging
logger = logging.getLogger(__package__)
if isinstance(logging.getLevelName('TRACE'), str):
    logging.addLevelName(5, 'TRACE')

# ses docs, this actually gets a number, because reasons
TRACE = logging.getLevelName('TRACE')

# don't log tokens
logging.getLogger("requests_oauthlib").setLevel(logging.INFO)
logging.getLogger("oauthlib").setLevel(logging.INFO)
