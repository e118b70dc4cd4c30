"""
Configuration of the audit client, loaded from env / .env.

All settings use the ``AUDIT_CLIENT_`` prefix, e.g. ``AUDIT_CLIENT_URI`` or
``AUDIT_CLIENT_DISCOVERY_ENABLED=true``.  :class:`ClientFactory` turns the
settings into ready to use clients sharing one transport and one locator.
"""

import logging
from typing import Callable, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from audit_client_lib.client import AuditClient
from audit_client_lib.constants import (
    MAIN_ENV_PREFIX,
    DEFAULT_SERVICE_ID,
    DEFAULT_SERVICE_URI,
    DEFAULT_DISCOVERY_URL,
)
from audit_client_lib.discovery.locator import (
    ConsulServiceLocator,
    RetryingServiceLocator,
    ServiceLocator,
    StaticServiceLocator,
    retry_policy,
)
from audit_client_lib.exceptions import AuditClientDisabledError
from audit_client_lib.replay_client import ReplayClient
from audit_client_lib.utils.http import HttpRequester
from audit_client_lib.utils.logger import prepare_logger
from audit_client_lib.validation.audit_parameters import AuditParameters


class AuditClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=MAIN_ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- general ---
    enabled: bool = True
    log_level: str = "INFO"

    # --- static location (used when discovery is disabled) ---
    uri: str = DEFAULT_SERVICE_URI
    service_id: str = DEFAULT_SERVICE_ID

    # --- discovery (Consul) ---
    discovery_enabled: bool = False
    discovery_url: str = DEFAULT_DISCOVERY_URL
    discovery_max_attempts: int = 10
    discovery_backoff_factor: float = 0.5
    discovery_backoff_max: float = 10.0

    # --- transport ---
    timeout: float = 10
    pool_size: int = 10
    verify_ssl: bool = True


class ClientFactory:
    """
    Builds clients from :class:`AuditClientSettings`.

    The transport and the locator are created once and shared by every
    client the factory returns.  When ``settings.enabled`` is false no client
    is built and :class:`AuditClientDisabledError` is raised instead.
    """

    def __init__(
        self,
        settings: Optional[AuditClientSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings or AuditClientSettings()
        self.logger = logger or prepare_logger(
            "audit_client_lib", level=self.settings.log_level
        )
        self._http: Optional[HttpRequester] = None
        self._locator: Optional[ServiceLocator] = None

    def _ensure_enabled(self) -> None:
        if not self.settings.enabled:
            raise AuditClientDisabledError(
                f"Audit client is disabled ({MAIN_ENV_PREFIX}ENABLED=false)"
            )

    @property
    def http(self) -> HttpRequester:
        if self._http is None:
            self._http = HttpRequester(
                timeout=self.settings.timeout,
                pool_size=self.settings.pool_size,
                verify=self.settings.verify_ssl,
                logger=self.logger,
            )
        return self._http

    @property
    def locator(self) -> ServiceLocator:
        if self._locator is None:
            s = self.settings
            if s.discovery_enabled:
                self._locator = RetryingServiceLocator(
                    ConsulServiceLocator(
                        registry_url=s.discovery_url,
                        service_id=s.service_id,
                        timeout=s.timeout,
                        logger=self.logger,
                    ),
                    retry=retry_policy(
                        max_attempts=s.discovery_max_attempts,
                        backoff_factor=s.discovery_backoff_factor,
                        backoff_max=s.discovery_backoff_max,
                    ),
                    logger=self.logger,
                )
            else:
                self._locator = StaticServiceLocator(s.uri, s.service_id)
        return self._locator

    def audit_validator(self) -> AuditParameters:
        return AuditParameters()

    def audit_client(
        self, validator_factory: Optional[Callable[[], AuditParameters]] = None
    ) -> AuditClient:
        self._ensure_enabled()
        return AuditClient(
            locator=self.locator,
            http=self.http,
            validator_factory=validator_factory or self.audit_validator,
            logger=self.logger,
        )

    def replay_client(self) -> ReplayClient:
        self._ensure_enabled()
        return ReplayClient(locator=self.locator, http=self.http, logger=self.logger)
