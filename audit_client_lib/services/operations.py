"""
Fixed table of the logical operations exposed by the audit service.

Every operation is an enum member whose value is an
:class:`OperationDescriptor`: HTTP verb, base path, the shape of the response,
whether the URL carries a target id and which parameters must be present.
The table is closed; façade methods only ever pick one of these members.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple
from urllib.parse import quote

from audit_client_lib.constants import (
    AUDIT_BASE_PATH,
    REPLAY_BASE_PATH,
    PATH_URI_PARAM,
    SEND_RATE_PARAM,
)


class ResponseShape(Enum):
    NONE = "none"
    TEXT = "text"
    STATUS = "status"
    STATUS_LIST = "status_list"


@dataclass(frozen=True)
class OperationDescriptor:
    """
    Attributes
    ----------
    name : str
        Logical operation name; also the last URL path segment, unless
        ``name_in_path`` is ``False``.
    http_method : str
        HTTP verb used for the call.
    response_shape : ResponseShape
        How a successful response body is decoded.
    base_path : str
        Path appended to the service id (e.g. ``/v1/replay``).
    requires_id : bool
        The operation acts on one existing resource and the URL carries its id,
        percent-encoded as a single path segment.
    required_params : Tuple[str, ...]
        Parameters that must be present on the request.
    name_in_path : bool
        Whether ``name`` is appended to the URL.
    """

    name: str
    http_method: str
    response_shape: ResponseShape
    base_path: str
    requires_id: bool = False
    required_params: Tuple[str, ...] = ()
    name_in_path: bool = True

    def path(self, target_id=None) -> str:
        segments = [self.base_path.rstrip("/")]
        if self.requires_id and target_id is not None:
            segments.append(quote(str(target_id), safe=""))
        if self.name_in_path:
            segments.append(self.name)
        return "/".join(segments)


def _replay(name, method, shape, requires_id=False, required_params=()):
    return OperationDescriptor(
        name=name,
        http_method=method,
        response_shape=shape,
        base_path=REPLAY_BASE_PATH,
        requires_id=requires_id,
        required_params=tuple(required_params),
    )


class ReplayOperation(Enum):
    CREATE = _replay("create", "POST", ResponseShape.TEXT, False, [PATH_URI_PARAM])
    CREATE_AND_START = _replay(
        "createAndStart", "POST", ResponseShape.TEXT, False, [PATH_URI_PARAM]
    )
    START = _replay("start", "PUT", ResponseShape.TEXT, True)
    START_ALL = _replay("startAll", "PUT", ResponseShape.TEXT)
    STATUS = _replay("status", "GET", ResponseShape.STATUS, True)
    STATUS_ALL = _replay("statusAll", "GET", ResponseShape.STATUS_LIST)
    UPDATE = _replay("update", "PUT", ResponseShape.TEXT, True, [SEND_RATE_PARAM])
    UPDATE_ALL = _replay("updateAll", "PUT", ResponseShape.TEXT, False, [SEND_RATE_PARAM])
    STOP = _replay("stop", "PUT", ResponseShape.TEXT, True)
    STOP_ALL = _replay("stopAll", "PUT", ResponseShape.TEXT)
    RESUME = _replay("resume", "PUT", ResponseShape.TEXT, True)
    RESUME_ALL = _replay("resumeAll", "PUT", ResponseShape.TEXT)
    DELETE = _replay("delete", "DELETE", ResponseShape.TEXT, True)
    DELETE_ALL = _replay("deleteAll", "DELETE", ResponseShape.TEXT)

    @property
    def descriptor(self) -> OperationDescriptor:
        return self.value


class AuditOperation(Enum):
    SUBMIT = OperationDescriptor(
        name="submit",
        http_method="POST",
        response_shape=ResponseShape.NONE,
        base_path=AUDIT_BASE_PATH,
        name_in_path=False,
    )

    @property
    def descriptor(self) -> OperationDescriptor:
        return self.value
