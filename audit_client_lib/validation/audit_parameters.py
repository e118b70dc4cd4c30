"""
Parameter validation policy applied to audit submissions.

``AuditParameters`` checks that the parameters required by the audit service
are present.  Deployments that require more parameters subclass it and extend
:meth:`AuditParameters.required_params` (or override :meth:`validate`), then
hand a factory for the subclass to :class:`~audit_client_lib.client.AuditClient`.
"""

from typing import List, Mapping, Optional, Sequence

from audit_client_lib.constants import AUDIT_REQUIRED_PARAMS, QUERY_AUDIT_TYPE
from audit_client_lib.data_models.audit import AuditType
from audit_client_lib.exceptions import InvalidRequest


class AuditParameters:
    """
    Validates the parameter map of an audit request.

    A fresh instance is created for every submission, so subclasses may keep
    per‑validation state.
    """

    operation: str = "submit"

    def required_params(self) -> List[str]:
        return list(AUDIT_REQUIRED_PARAMS)

    def validate(self, params: Optional[Mapping[str, Sequence[str]]]) -> None:
        """
        Check ``params`` against :meth:`required_params`.

        Raises
        ------
        InvalidRequest
            For the first required parameter that is missing, or when the
            audit type is not a known :class:`AuditType`.
        """
        params = params or {}
        for name in self.required_params():
            if not params.get(name):
                raise InvalidRequest(
                    field=name,
                    operation=self.operation,
                    message=f"Required parameter {name} not found",
                )

        for audit_type in params.get(QUERY_AUDIT_TYPE) or ():
            try:
                AuditType(audit_type)
            except ValueError:
                raise InvalidRequest(
                    field=QUERY_AUDIT_TYPE,
                    operation=self.operation,
                    message=f"Invalid audit type: {audit_type}",
                )
