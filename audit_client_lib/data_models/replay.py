"""
Replay request and the status records returned by the replay endpoints.

``ReplayRequest.Builder`` accumulates the optional replay fields and turns
them into the ordered parameter map.  Which fields are required depends on
the operation, so the builder itself never validates anything.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from audit_client_lib.constants import (
    PATH_URI_PARAM,
    SEND_RATE_PARAM,
    REPLAY_UNFINISHED_FILES_PARAM,
)
from audit_client_lib.data_models.base_model import BaseRequest
from audit_client_lib.data_models.identity import CallerIdentity
from audit_client_lib.data_models.params import ParameterMap


class ReplayRequest(BaseRequest):
    """
    Replay request for one replay or for all replays of the caller.

    Request parameters
    ------------------
    pathUri
        Path where the audit file(s) to be replayed can be found.
    sendRate
        Number of messages to send per second.
    replayUnfinishedFiles
        Whether files from an unfinished audit replay should be included.
    """

    __slots__ = ()

    class Builder:
        def __init__(self) -> None:
            self.caller_identity: Optional[CallerIdentity] = None
            self.id: Optional[str] = None
            self.path_uri: Optional[str] = None
            self.send_rate: Optional[int] = None
            self.replay_unfinished_files: Optional[bool] = None

        def with_caller_identity(
            self, caller_identity: CallerIdentity
        ) -> "ReplayRequest.Builder":
            self.caller_identity = caller_identity
            return self

        def with_id(self, replay_id: str) -> "ReplayRequest.Builder":
            self.id = replay_id
            return self

        def with_path_uri(self, path_uri: str) -> "ReplayRequest.Builder":
            self.path_uri = path_uri
            return self

        def with_send_rate(self, send_rate: int) -> "ReplayRequest.Builder":
            self.send_rate = send_rate
            return self

        def with_replay_unfinished_files(
            self, replay_unfinished_files: bool
        ) -> "ReplayRequest.Builder":
            self.replay_unfinished_files = replay_unfinished_files
            return self

        def build(self) -> "ReplayRequest":
            pairs = []
            if self.path_uri is not None:
                pairs.append((PATH_URI_PARAM, self.path_uri))
            if self.send_rate is not None:
                pairs.append((SEND_RATE_PARAM, str(int(self.send_rate))))
            if self.replay_unfinished_files is not None:
                pairs.append(
                    (
                        REPLAY_UNFINISHED_FILES_PARAM,
                        "true" if self.replay_unfinished_files else "false",
                    )
                )
            return ReplayRequest(
                caller_identity=self.caller_identity,
                target_id=self.id,
                params=ParameterMap(pairs),
            )


class ReplayState(str, Enum):
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    IDLE = "IDLE"
    STOPPED = "STOPPED"
    CANCELED = "CANCELED"
    FINISHED = "FINISHED"
    FAILED = "FAILED"


class FileState(str, Enum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"
    FAILED = "FAILED"


class FileStatus(BaseModel):
    """Progress of a single audit file within a replay."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path: str
    state: Optional[FileState] = None
    lines_read: int = Field(default=0, alias="linesRead")
    lines_failed: int = Field(default=0, alias="linesFailed")
    partial_file: bool = Field(default=False, alias="partialFile")


class ReplayStatus(BaseModel):
    """
    Status record of a replay as reported by the replay service.

    Attributes
    ----------
    id : str
        The replay id returned by ``create``.
    state : Optional[ReplayState]
        Current state of the replay.
    path_uri : Optional[str]
        Location of the replayed audit files.
    send_rate : Optional[int]
        Messages sent per second.
    replay_unfinished_files : Optional[bool]
        Whether unfinished audit files are included.
    last_updated : Optional[datetime]
        Time of the last status change (epoch millis or ISO‑8601 on the wire).
    files : List[FileStatus]
        Per‑file progress.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    state: Optional[ReplayState] = None
    path_uri: Optional[str] = Field(default=None, alias="pathUri")
    send_rate: Optional[int] = Field(default=None, alias="sendRate")
    replay_unfinished_files: Optional[bool] = Field(
        default=None, alias="replayUnfinishedFiles"
    )
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
    files: List[FileStatus] = Field(default_factory=list)
