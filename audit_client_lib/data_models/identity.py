"""
Caller identity carried by every audit and replay request.

The identity is produced by whatever authentication layer the calling service
uses; this library only carries it and derives the request credential from it.
"""

from typing import Optional, Tuple

from requests import PreparedRequest
from requests.auth import AuthBase
from pydantic import BaseModel, ConfigDict


class CallerIdentity(BaseModel):
    """
    Authenticated principal on whose behalf a request is made.

    Attributes
    ----------
    principal : str
        Distinguished name of the user (``userDn`` of an audit record).
    issuer : Optional[str]
        Distinguished name of the issuer of the principal's certificate.
    authorizations : Tuple[str, ...]
        Data authorizations of the principal.
    roles : Tuple[str, ...]
        Roles assigned to the principal.
    token : Optional[str]
        Opaque credential (e.g. a signed JWT) presented to the audit service.
    """

    model_config = ConfigDict(frozen=True)

    principal: str
    issuer: Optional[str] = None
    authorizations: Tuple[str, ...] = ()
    roles: Tuple[str, ...] = ()
    token: Optional[str] = None


class CallerIdentityAuth(AuthBase):
    """Attach a :class:`CallerIdentity` to an outgoing ``requests`` call."""

    def __init__(self, identity: CallerIdentity) -> None:
        self.identity = identity

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        if self.identity.token:
            r.headers["Authorization"] = f"Bearer {self.identity.token}"
        r.headers["X-Principal-DN"] = self.identity.principal
        return r
