"""
This is the complete list of exceptions that should be thrown by flows and providers.
"""

from typing import Optional

from .utils import truncate

__all__ = ["AuthException", "InvalidArgument", "AuthorizationDenied", "MissingAuthorizationCode",
           "ProviderProtocolError"]


class AuthException(Exception):                      # base of everything the flows raise
    def __init__(self, *args, original_exception=None):
        super().__init__(*args)
        self.original_exception = original_exception


class InvalidArgument(AuthException, ValueError):    # caller supplied malformed/missing input
    pass


class AuthorizationDenied(AuthException):            # user or provider said no, restart from step 1
    def __init__(self, msg, *, error: str = None, description: str = None):
        super().__init__(msg)
        self.error = error
        self.description = description


class MissingAuthorizationCode(AuthException):       # callback lacked code/verifier
    pass


class ProviderProtocolError(AuthException):          # non-200, bad payload, or transport failure
    """
    Raised when talking to the identity provider went wrong.

    Args:
        msg: human readable description, names the provider
        provider: provider name
        status_code: http status, None when the request never completed
        body: response body, truncated for logging
        original_exception: underlying transport or parse error, if any
    """
    def __init__(self, msg, *, provider: str = None, status_code: Optional[int] = None, body: str = None,
                 original_exception=None):
        super().__init__(msg, original_exception=original_exception)
        self.provider = provider
        self.status_code = status_code
        self.body = truncate(body)

    def __str__(self):
        msg = super().__str__()
        if self.status_code is not None:
            msg += " (status: %s)" % self.status_code
        return msg
