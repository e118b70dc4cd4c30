from audit_client_lib.client import AuditClient
from audit_client_lib.replay_client import ReplayClient
from audit_client_lib.config import AuditClientSettings, ClientFactory
from audit_client_lib.data_models.audit import AuditRequest, AuditType, SecurityMarking
from audit_client_lib.data_models.identity import CallerIdentity
from audit_client_lib.data_models.replay import ReplayRequest, ReplayStatus
from audit_client_lib.discovery.locator import (
    ConsulServiceLocator,
    Endpoint,
    RetryingServiceLocator,
    ServiceLocator,
    StaticServiceLocator,
    retry_policy,
)
from audit_client_lib.exceptions import (
    AuditClientError,
    InvalidRequest,
    ServiceUnavailable,
    RemoteOperationFailed,
    TransportError,
    AuditClientDisabledError,
)
from audit_client_lib.validation.audit_parameters import AuditParameters

__all__ = [
    "AuditClient",
    "ReplayClient",
    "AuditClientSettings",
    "ClientFactory",
    "AuditRequest",
    "AuditType",
    "SecurityMarking",
    "CallerIdentity",
    "ReplayRequest",
    "ReplayStatus",
    "ConsulServiceLocator",
    "Endpoint",
    "RetryingServiceLocator",
    "ServiceLocator",
    "StaticServiceLocator",
    "retry_policy",
    "AuditClientError",
    "InvalidRequest",
    "ServiceUnavailable",
    "RemoteOperationFailed",
    "TransportError",
    "AuditClientDisabledError",
    "AuditParameters",
]
