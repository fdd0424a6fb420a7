"""
Base types for socialauth
"""
from typing import Optional
from enum import Enum
from dataclasses import dataclass
from datetime import datetime, timezone

__all__ = ["Gender", "FlowState", "AuthorizationRequest", "AccessToken", "RequestToken", "UserInformation",
           "AuthenticatedClient", "parse_gender"]


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class FlowState(Enum):
    AWAITING_CODE = "awaiting code"
    EXCHANGING_TOKEN = "exchanging token"
    FETCHING_PROFILE = "fetching profile"
    COMPLETE = "complete"
    FAILED = "failed"


def parse_gender(val: Optional[str]) -> Gender:
    """Vendor gender string to Gender, anything unrecognized is UNKNOWN"""
    if not isinstance(val, str):
        return Gender.UNKNOWN
    val = val.strip().lower()
    if val == "male":
        return Gender.MALE
    if val == "female":
        return Gender.FEMALE
    return Gender.UNKNOWN


@dataclass(frozen=True)
class AuthorizationRequest:
    """One login attempt, as sent to the provider.  Correlating the state on the way back is up to the caller."""
    callback_uri: str
    state: Optional[str] = None


@dataclass(frozen=True)
class AccessToken:
    token: str                                      # bearer token, or oauth1 public token
    expires_at: Optional[datetime] = None           # utc, None if the provider doesn't expire them
    token_type: Optional[str] = None
    secret: Optional[str] = None                    # oauth1 only

    def is_expired(self, now: datetime = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def __repr__(self):
        # don't log tokens
        return "AccessToken(token=<%d chars>, expires_at=%r, token_type=%r)" % (
            len(self.token or ""), self.expires_at, self.token_type)


@dataclass(frozen=True)
class RequestToken:
    """OAuth 1.0a temporary credentials, the caller must hold on to the secret until the callback arrives."""
    token: str
    secret: str
    authorization_url: str

    def __repr__(self):
        return "RequestToken(authorization_url=%r)" % self.authorization_url


@dataclass(frozen=True)                 # pylint: disable=too-many-instance-attributes
class UserInformation:
    """Normalized identity record"""
    id: str                                         # provider assigned, never empty
    name: Optional[str] = None
    email: Optional[str] = None
    locale: Optional[str] = None
    picture_url: Optional[str] = None
    user_name: Optional[str] = None
    gender: Gender = Gender.UNKNOWN


@dataclass(frozen=True)
class AuthenticatedClient:
    """Terminal result of a flow"""
    provider_name: str
    user_information: UserInformation
    access_token: AccessToken
