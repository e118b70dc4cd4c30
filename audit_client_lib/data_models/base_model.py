"""
Base request type shared by audit and replay requests.

A request bundles the caller identity, an optional target id and the ordered
multi‑valued parameters.  All fields are fixed when the builder calls the
constructor; there are no setters.
"""

from typing import Optional

from audit_client_lib.data_models.identity import CallerIdentity
from audit_client_lib.data_models.params import ParameterMap


class BaseRequest:
    """
    Immutable request passed to a client method.

    Attributes
    ----------
    caller_identity : Optional[CallerIdentity]
        Principal the request is made for.  Required by every operation, but
        checked when the request is used, not when it is built.
    target_id : Optional[str]
        Id of the resource the operation acts on, if any.
    params : Optional[ParameterMap]
        Ordered request parameters; ``None`` when no parameter was supplied.
    """

    __slots__ = ("_caller_identity", "_target_id", "_params")

    def __init__(
        self,
        caller_identity: Optional[CallerIdentity],
        target_id: Optional[str] = None,
        params: Optional[ParameterMap] = None,
    ) -> None:
        object.__setattr__(self, "_caller_identity", caller_identity)
        object.__setattr__(self, "_target_id", target_id)
        object.__setattr__(self, "_params", params if params else None)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def caller_identity(self) -> Optional[CallerIdentity]:
        return self._caller_identity

    @property
    def target_id(self) -> Optional[str]:
        return self._target_id

    @property
    def params(self) -> Optional[ParameterMap]:
        return self._params

    def __repr__(self) -> str:
        principal = self._caller_identity.principal if self._caller_identity else None
        return (
            f"{type(self).__name__}(principal={principal!r}, "
            f"target_id={self._target_id!r}, params={self._params!r})"
        )
