"""
Thin wrapper around ``requests`` that adds logging, connection pooling and
unified error handling.

The :class:`HttpRequester` class is shared by every client talking to the
audit service.  It centralises:

* one pooled ``requests.Session`` that is safe to share between threads,
* the per‑request timeout and TLS verification settings,
* conversion of network‑level failures into :class:`TransportError`,
* conversion of non‑success HTTP codes into :class:`RemoteOperationFailed`.

Retries are deliberately absent at this level: a failed call is reported to
the caller, who decides whether to repeat it.
"""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from audit_client_lib.exceptions import RemoteOperationFailed, TransportError


class HttpRequester:
    """
    Helper for making authenticated HTTP calls to the audit service.

    Parameters
    ----------
    timeout : float, default ``10``
        Per‑request timeout in seconds.
    pool_size : int, default ``10``
        Maximum number of pooled connections per host.
    verify : bool, default ``True``
        Whether TLS certificates are verified.
    session : Optional[requests.Session]
        Pre‑configured session (e.g. with client certificates).  A new session
        is created when omitted.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        timeout: float = 10,
        pool_size: int = 10,
        verify: bool = True,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.timeout = timeout
        self.verify = verify
        self.logger = logger or logging.getLogger(__name__)

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0
            )
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session

    @staticmethod
    def check_status(operation: str, resp: requests.Response) -> requests.Response:
        """
        Translate a non‑success HTTP status into :class:`RemoteOperationFailed`.

        Parameters
        ----------
        operation : str
            Name of the logical operation, reported in the error.
        resp : requests.Response
            The raw response from ``requests``.

        Returns
        -------
        requests.Response
            The same response object if the status is 2xx.

        Raises
        ------
        RemoteOperationFailed
            For any status outside the 2xx range, carrying the status code and
            the reason phrase sent by the server.
        """
        if not 200 <= resp.status_code < 300:
            raise RemoteOperationFailed(
                operation=operation,
                status_code=resp.status_code,
                reason=resp.reason or "",
            )
        return resp

    def request(
        self, method: str, url: str, operation: str, **kwargs
    ) -> requests.Response:
        """
        Perform a single HTTP call.

        Parameters
        ----------
        method : str
            HTTP verb (``GET``, ``POST``, ``PUT``, ``DELETE``).
        url : str
            Absolute URL of the call.
        operation : str
            Name of the logical operation, used in logs and errors.
        **kwargs
            Additional arguments forwarded to ``requests.Session.request``
            (e.g. ``data`` or ``auth``).

        Returns
        -------
        requests.Response
            The raw response; the status is not checked here.

        Raises
        ------
        TransportError
            When the call fails before an HTTP response is received.
        """
        self.logger.debug("%s %s | operation=%s", method, url, operation)
        try:
            return self.session.request(
                method, url, timeout=self.timeout, verify=self.verify, **kwargs
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"{operation} request to {url} failed: {exc}", operation=operation
            ) from exc

    def close(self) -> None:
        self.session.close()
