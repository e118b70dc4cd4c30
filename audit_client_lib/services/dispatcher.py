"""
Uniform dispatch of a logical operation to the audit service.

The dispatcher knows nothing about individual operations: the
:class:`~audit_client_lib.services.operations.OperationDescriptor` tells it
the verb, the path and how to decode the response.  The service location is
resolved again for every call.
"""

import logging
from typing import Any, List, Optional

from pydantic import TypeAdapter

from audit_client_lib.data_models.base_model import BaseRequest
from audit_client_lib.data_models.identity import CallerIdentityAuth
from audit_client_lib.data_models.replay import ReplayStatus
from audit_client_lib.discovery.locator import ServiceLocator
from audit_client_lib.exceptions import RemoteOperationFailed, TransportError
from audit_client_lib.services.operations import OperationDescriptor, ResponseShape
from audit_client_lib.utils.http import HttpRequester

_STATUS_LIST = TypeAdapter(List[ReplayStatus])


class Dispatcher:
    """
    Performs one authenticated call per dispatched operation.

    Parameters
    ----------
    locator : ServiceLocator
        Resolves the audit service instance for each call.
    http : HttpRequester
        Transport used for the call.
    logger : logging.Logger
        Logger instance used for debugging and error reporting.
    """

    def __init__(
        self,
        locator: ServiceLocator,
        http: HttpRequester,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.locator = locator
        self.http = http
        self.logger = logger or logging.getLogger(__name__)

    def url_for(self, descriptor: OperationDescriptor, request: BaseRequest) -> str:
        endpoint = self.locator.resolve()
        return endpoint.url(descriptor.path(request.target_id))

    def dispatch(self, descriptor: OperationDescriptor, request: BaseRequest) -> Any:
        """
        Send ``request`` as ``descriptor`` and decode the response.

        Returns
        -------
        Any
            ``None``, the response text, a :class:`ReplayStatus` or a list of
            them, depending on ``descriptor.response_shape``.

        Raises
        ------
        ServiceUnavailable
            If the audit service cannot be located.
        TransportError
            On network failures or a body that cannot be decoded.
        RemoteOperationFailed
            If the service answers with a non‑success status.
        """
        params = request.params
        self.logger.debug(
            "Submitting %s request: %s",
            descriptor.name,
            params.to_dict() if params else None,
        )

        url = self.url_for(descriptor, request)
        self.logger.debug("Submitting %s request to %s", descriptor.name, url)

        resp = self.http.request(
            descriptor.http_method,
            url,
            operation=descriptor.name,
            data=params.form_items() if params else None,
            auth=CallerIdentityAuth(request.caller_identity),
        )
        try:
            self.http.check_status(descriptor.name, resp)
        except RemoteOperationFailed as exc:
            self.logger.error(str(exc))
            raise

        return self._decode(descriptor, resp)

    @staticmethod
    def _decode(descriptor: OperationDescriptor, resp) -> Any:
        shape = descriptor.response_shape
        if shape is ResponseShape.NONE:
            return None
        if shape is ResponseShape.TEXT:
            return resp.text

        try:
            body = resp.json()
            if shape is ResponseShape.STATUS:
                return ReplayStatus.model_validate(body)
            return _STATUS_LIST.validate_python(body)
        except ValueError as exc:
            raise TransportError(
                f"Invalid {descriptor.name} response format: {exc}",
                operation=descriptor.name,
            ) from exc
