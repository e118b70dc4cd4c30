"""
Resolution of the audit service location.

A :class:`ServiceLocator` answers "where is the audit service right now".
Two plain resolvers are provided (a static one built from configuration and
one querying a Consul registry); retrying is added by composing any resolver
with :class:`RetryingServiceLocator`, so the retry policy can be swapped
without touching the resolution logic.
"""

import abc
import logging
from typing import Optional, Tuple, Type
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, ConfigDict
from urllib3.exceptions import MaxRetryError
from urllib3.util.retry import Retry

from audit_client_lib.exceptions import RegistryLookupError, ServiceUnavailable


class Endpoint(BaseModel):
    """
    A reachable audit service instance.

    Attributes
    ----------
    uri : str
        ``scheme://host:port`` of the instance, without a path.
    service_id : str
        Logical service name; used as the first URL path segment.
    """

    model_config = ConfigDict(frozen=True)

    uri: str
    service_id: str

    def url(self, path: str) -> str:
        """Absolute URL of ``path`` under the service id of this instance."""
        path = path if path.startswith("/") else "/" + path
        return f"{self.uri.rstrip('/')}/{self.service_id}{path}"


class ServiceLocator(abc.ABC):
    """Resolves the logical audit service name to an :class:`Endpoint`."""

    service_id: str = ""

    @abc.abstractmethod
    def resolve(self) -> Endpoint:
        raise NotImplementedError


class StaticServiceLocator(ServiceLocator):
    """
    Locator returning a fixed, configured instance.

    Only the scheme, host and port of ``uri`` are used; the service id forms
    the path prefix.
    """

    def __init__(self, uri: str, service_id: str) -> None:
        parts = urlsplit(uri)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"Invalid audit service uri: {uri!r}")
        self.service_id = service_id
        self._endpoint = Endpoint(
            uri=f"{parts.scheme}://{parts.netloc}", service_id=service_id
        )

    def resolve(self) -> Endpoint:
        return self._endpoint


class ConsulServiceLocator(ServiceLocator):
    """
    Locator querying the health endpoint of a Consul agent.

    The first instance reported as passing its health checks is returned.
    Instances tagged ``secure=true`` (or with ``secure: "true"`` service
    metadata) are addressed over ``https``.

    Parameters
    ----------
    registry_url : str
        Base URL of the Consul agent (e.g. ``http://localhost:8500``).
    service_id : str
        Name under which the audit service is registered.
    session : Optional[requests.Session]
        Session used for the registry calls.
    timeout : float, default ``5``
        Timeout of a single registry call, in seconds.
    """

    HEALTH_PATH = "/v1/health/service/{service_id}"

    def __init__(
        self,
        registry_url: str,
        service_id: str,
        session: Optional[requests.Session] = None,
        timeout: float = 5,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry_url = registry_url.rstrip("/")
        self.service_id = service_id
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self) -> Endpoint:
        url = self.registry_url + self.HEALTH_PATH.format(service_id=self.service_id)
        try:
            resp = self.session.get(
                url, params={"passing": "true"}, timeout=self.timeout
            )
            resp.raise_for_status()
            entries = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise RegistryLookupError(
                f"Registry lookup of '{self.service_id}' failed: {exc}"
            ) from exc

        if not isinstance(entries, list):
            raise RegistryLookupError(
                f"Unexpected registry response for '{self.service_id}': {entries!r}"
            )
        if not entries:
            raise RegistryLookupError(
                f"No healthy instances of '{self.service_id}' registered"
            )
        return self._endpoint_from_entry(entries[0])

    def _endpoint_from_entry(self, entry) -> Endpoint:
        if not isinstance(entry, dict):
            raise RegistryLookupError(
                f"Unexpected registry entry for '{self.service_id}': {entry!r}"
            )
        service = entry.get("Service") or {}
        node = entry.get("Node") or {}
        if not isinstance(service, dict) or not isinstance(node, dict):
            raise RegistryLookupError(
                f"Unexpected registry entry for '{self.service_id}': {entry!r}"
            )
        host = service.get("Address") or node.get("Address")
        port = service.get("Port")
        if not host or not port:
            raise RegistryLookupError(
                f"Incomplete registry entry for '{self.service_id}': {entry}"
            )

        tags = service.get("Tags") or []
        meta = service.get("Meta") or {}
        secure = "secure=true" in tags or str(meta.get("secure")).lower() == "true"
        scheme = "https" if secure else "http"
        return Endpoint(uri=f"{scheme}://{host}:{port}", service_id=self.service_id)


def retry_policy(
    max_attempts: int, backoff_factor: float = 0.5, backoff_max: float = 10.0
) -> Retry:
    """
    Build the retry policy used by :class:`RetryingServiceLocator`.

    ``max_attempts`` counts the first attempt, so ``1`` disables retrying.
    The first retry follows immediately.  Before retry ``n >= 2`` the locator
    sleeps ``backoff_factor * 2 ** (n - 1)`` seconds, capped at ``backoff_max``.
    """
    return Retry(
        total=max(max_attempts, 1) - 1,
        connect=None,
        read=None,
        redirect=None,
        status=None,
        other=None,
        backoff_factor=backoff_factor,
        backoff_max=backoff_max,
        raise_on_status=False,
    )


class RetryingServiceLocator(ServiceLocator):
    """
    Decorator adding a retry policy to another locator.

    Parameters
    ----------
    delegate : ServiceLocator
        The resolver doing the actual lookup.
    retry : Retry
        ``urllib3`` retry policy; ``total`` bounds the number of retries and
        ``backoff_factor`` the sleep between attempts.  The instance is never
        mutated, every :meth:`resolve` starts from it.
    retry_on : Tuple[Type[BaseException], ...]
        Failures that qualify for another attempt.  Anything else propagates
        unchanged.
    """

    def __init__(
        self,
        delegate: ServiceLocator,
        retry: Optional[Retry] = None,
        retry_on: Tuple[Type[BaseException], ...] = (RegistryLookupError,),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.delegate = delegate
        self.service_id = delegate.service_id
        self.retry = retry if retry is not None else retry_policy(max_attempts=3)
        self.retry_on = retry_on
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self) -> Endpoint:
        retry = self.retry.new()
        attempts = 0
        while True:
            attempts += 1
            try:
                return self.delegate.resolve()
            except self.retry_on as exc:
                try:
                    retry = retry.increment(error=exc)
                except MaxRetryError:
                    self.logger.error(
                        "Unable to locate '%s' after %d attempt(s): %s",
                        self.service_id,
                        attempts,
                        exc,
                    )
                    raise ServiceUnavailable(self.service_id, attempts) from exc
                self.logger.warning(
                    "Attempt %d to locate '%s' failed: %s",
                    attempts,
                    self.service_id,
                    exc,
                )
                retry.sleep()
