import logging
from typing import Callable, Optional

from audit_client_lib.constants import CALLER_IDENTITY_FIELD, TARGET_ID_FIELD
from audit_client_lib.data_models.audit import AuditRequest
from audit_client_lib.data_models.base_model import BaseRequest
from audit_client_lib.discovery.locator import ServiceLocator
from audit_client_lib.exceptions import InvalidRequest
from audit_client_lib.services.dispatcher import Dispatcher
from audit_client_lib.services.operations import AuditOperation, OperationDescriptor
from audit_client_lib.utils.http import HttpRequester
from audit_client_lib.validation.audit_parameters import AuditParameters


class BaseServiceClient:
    """
    Common plumbing of the audit and replay clients.

    Parameters
    ----------
    locator : ServiceLocator
        Resolves the audit service instance for every call.
    http : Optional[HttpRequester]
        Shared transport; created from ``timeout`` when omitted.
    timeout : float, default ``10``
        Per‑request timeout used when ``http`` is created here.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        locator: ServiceLocator,
        http: Optional[HttpRequester] = None,
        timeout: float = 10,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.locator = locator
        self.http = http or HttpRequester(timeout=timeout, logger=self.logger)
        self.dispatcher = Dispatcher(locator, self.http, self.logger)

    @staticmethod
    def validate_request(request: BaseRequest, operation: str) -> None:
        if request is None:
            raise InvalidRequest(
                "request", operation=operation, message="request cannot be null"
            )
        if request.caller_identity is None:
            raise InvalidRequest(CALLER_IDENTITY_FIELD, operation=operation)

    @staticmethod
    def require_fields(request: BaseRequest, descriptor: OperationDescriptor) -> None:
        """
        Check the fields ``descriptor`` declares as required on ``request``.

        Raises
        ------
        InvalidRequest
            Naming the first missing field, or the target id when it cannot
            form a path segment of its own.
        """
        if descriptor.requires_id:
            if request.target_id is None:
                raise InvalidRequest(TARGET_ID_FIELD, operation=descriptor.name)
            if str(request.target_id) in ("", ".", ".."):
                raise InvalidRequest(
                    TARGET_ID_FIELD,
                    operation=descriptor.name,
                    message=f"Invalid id: {request.target_id!r}",
                )
        params = request.params or {}
        for name in descriptor.required_params:
            if name not in params:
                raise InvalidRequest(name, operation=descriptor.name)


class AuditClient(BaseServiceClient):
    """
    Simple rest client for submitting requests to the audit service.

    Parameters
    ----------
    validator_factory : Callable[[], AuditParameters]
        Creates the parameter‑validation policy applied to every submission.
        Defaults to :class:`AuditParameters`; pass a factory of a subclass to
        require additional parameters.
    """

    def __init__(
        self,
        locator: ServiceLocator,
        http: Optional[HttpRequester] = None,
        validator_factory: Callable[[], AuditParameters] = AuditParameters,
        timeout: float = 10,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(locator=locator, http=http, timeout=timeout, logger=logger)
        self.validator_factory = validator_factory

    # ------------------------------------------------------------------ #
    def submit(
        self, request: AuditRequest, validator: Optional[AuditParameters] = None
    ) -> None:
        """
        Submit an audit record.

        Parameters
        ----------
        request : AuditRequest
            The audit request; see :class:`AuditRequest.Builder`.
        validator : Optional[AuditParameters]
            Validation policy for this call only; a fresh instance from
            ``validator_factory`` is used when omitted.

        Raises
        ------
        InvalidRequest
            If the request misses a required parameter (no call is made).
        """
        descriptor = AuditOperation.SUBMIT.descriptor
        self.validate_request(request, descriptor.name)
        self.validate(request, validator or self.validator_factory())
        self.dispatcher.dispatch(descriptor, request)

    @staticmethod
    def validate(request: AuditRequest, validator: AuditParameters) -> None:
        validator.validate(request.params)
