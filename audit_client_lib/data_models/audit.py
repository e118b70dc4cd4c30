"""
Audit request submitted for a given query.

The builder merges the caller supplied parameters with the fixed audit fields
(query expression, security marking, audit type, query logic) and with the
user details taken from the caller identity.  Fixed fields replace caller
parameters of the same name.
"""

from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from audit_client_lib.constants import (
    QUERY_STRING,
    QUERY_AUTHORIZATIONS,
    QUERY_USER_DN,
    QUERY_AUDIT_TYPE,
    QUERY_SECURITY_MARKING_COLVIZ,
    QUERY_LOGIC_CLASS,
)
from audit_client_lib.data_models.base_model import BaseRequest
from audit_client_lib.data_models.identity import CallerIdentity
from audit_client_lib.data_models.params import ParameterMap, ParamValues


class AuditType(str, Enum):
    NONE = "NONE"
    PASSIVE = "PASSIVE"
    ACTIVE = "ACTIVE"
    LOCALONLY = "LOCALONLY"


class SecurityMarking(BaseModel):
    """Security marking (column visibility) of the audited query."""

    model_config = ConfigDict(frozen=True)

    column_visibility: str

    def to_params(self) -> Dict[str, str]:
        return {QUERY_SECURITY_MARKING_COLVIZ: self.column_visibility}


class AuditRequest(BaseRequest):
    """
    Audit request for a given query.

    Built with :class:`AuditRequest.Builder`; validated by the active
    :class:`~audit_client_lib.validation.audit_parameters.AuditParameters`
    policy when it is submitted.
    """

    __slots__ = ()

    class Builder:
        def __init__(self) -> None:
            self.caller_identity: Optional[CallerIdentity] = None
            self.params: Optional[Mapping[str, ParamValues]] = None
            self.query_expression: Optional[str] = None
            self.marking: Optional[SecurityMarking] = None
            self.audit_type: Optional[AuditType] = None
            self.query_logic: Optional[str] = None

        def with_caller_identity(
            self, caller_identity: CallerIdentity
        ) -> "AuditRequest.Builder":
            self.caller_identity = caller_identity
            return self

        def with_params(
            self, params: Mapping[str, ParamValues]
        ) -> "AuditRequest.Builder":
            self.params = params
            return self

        def with_query_expression(self, query: str) -> "AuditRequest.Builder":
            self.query_expression = query
            return self

        def with_marking(self, marking: SecurityMarking) -> "AuditRequest.Builder":
            self.marking = marking
            return self

        def with_audit_type(self, audit_type: AuditType) -> "AuditRequest.Builder":
            self.audit_type = audit_type
            return self

        def with_query_logic(self, query_logic: str) -> "AuditRequest.Builder":
            self.query_logic = query_logic
            return self

        def build(self) -> "AuditRequest":
            fixed: Dict[str, Tuple[str, ...]] = {}
            if self.query_expression is not None:
                fixed[QUERY_STRING] = (self.query_expression,)
            if self.audit_type is not None:
                audit_type = getattr(self.audit_type, "value", self.audit_type)
                fixed[QUERY_AUDIT_TYPE] = (str(audit_type),)
            if self.query_logic is not None:
                fixed[QUERY_LOGIC_CLASS] = (self.query_logic,)
            if self.marking is not None:
                for name, value in self.marking.to_params().items():
                    fixed[name] = (value,)
            if self.caller_identity is not None:
                fixed[QUERY_USER_DN] = (self.caller_identity.principal,)
                fixed[QUERY_AUTHORIZATIONS] = (
                    ",".join(self.caller_identity.authorizations),
                )

            pairs = [
                (name, values)
                for name, values in ParameterMap.of(self.params).items()
                if name not in fixed
            ]
            pairs.extend(fixed.items())
            return AuditRequest(
                caller_identity=self.caller_identity,
                params=ParameterMap(pairs),
            )
