"""
Rest client for the audit replay service.

Each public method maps to one replay operation.  The method checks the
fields that operation needs, then hands the request to the dispatcher; any
failure propagates to the caller unchanged.
"""

from typing import Any, List

from audit_client_lib.client import BaseServiceClient
from audit_client_lib.data_models.replay import ReplayRequest, ReplayStatus
from audit_client_lib.services.operations import ReplayOperation


class ReplayClient(BaseServiceClient):
    """
    Simple rest client for submitting requests to the audit replay service.

    Request parameters used by the operations (see
    :class:`ReplayRequest.Builder`):

    * ``pathUri`` (required by ``create``/``create_and_start``) – path where
      the audit file(s) to be replayed can be found,
    * ``sendRate`` (required by ``update``/``update_all``) – number of
      messages to send per second,
    * ``replayUnfinishedFiles`` – whether files from an unfinished audit
      replay should be included,
    * ``id`` (required by the single‑replay operations) – the replay id.
    """

    def _submit(self, operation: ReplayOperation, request: ReplayRequest) -> Any:
        descriptor = operation.descriptor
        self.validate_request(request, descriptor.name)
        self.require_fields(request, descriptor)
        return self.dispatcher.dispatch(descriptor, request)

    # ------------------------------------------------------------------ #
    def create(self, request: ReplayRequest) -> str:
        """Create an audit replay; returns the replay id."""
        return self._submit(ReplayOperation.CREATE, request)

    def create_and_start(self, request: ReplayRequest) -> str:
        """Create an audit replay and start it; returns the replay id."""
        return self._submit(ReplayOperation.CREATE_AND_START, request)

    # ------------------------------------------------------------------ #
    def start(self, request: ReplayRequest) -> str:
        """Start a replay; returns whether it was started."""
        return self._submit(ReplayOperation.START, request)

    def start_all(self, request: ReplayRequest) -> str:
        """Start all replays; returns the number of replays started."""
        return self._submit(ReplayOperation.START_ALL, request)

    # ------------------------------------------------------------------ #
    def status(self, request: ReplayRequest) -> ReplayStatus:
        return self._submit(ReplayOperation.STATUS, request)

    def status_all(self, request: ReplayRequest) -> List[ReplayStatus]:
        return self._submit(ReplayOperation.STATUS_ALL, request)

    # ------------------------------------------------------------------ #
    def update(self, request: ReplayRequest) -> str:
        """Change the send rate of a replay."""
        return self._submit(ReplayOperation.UPDATE, request)

    def update_all(self, request: ReplayRequest) -> str:
        """Change the send rate of all replays."""
        return self._submit(ReplayOperation.UPDATE_ALL, request)

    # ------------------------------------------------------------------ #
    def stop(self, request: ReplayRequest) -> str:
        return self._submit(ReplayOperation.STOP, request)

    def stop_all(self, request: ReplayRequest) -> str:
        return self._submit(ReplayOperation.STOP_ALL, request)

    def resume(self, request: ReplayRequest) -> str:
        return self._submit(ReplayOperation.RESUME, request)

    def resume_all(self, request: ReplayRequest) -> str:
        return self._submit(ReplayOperation.RESUME_ALL, request)

    # ------------------------------------------------------------------ #
    def delete(self, request: ReplayRequest) -> str:
        return self._submit(ReplayOperation.DELETE, request)

    def delete_all(self, request: ReplayRequest) -> str:
        return self._submit(ReplayOperation.DELETE_ALL, request)
