from collections import deque
from typing import List
from urllib.parse import parse_qsl

import pytest
import requests

from audit_client_lib.client import AuditClient
from audit_client_lib.data_models.audit import SecurityMarking
from audit_client_lib.data_models.identity import CallerIdentity
from audit_client_lib.discovery.locator import (
    Endpoint,
    ServiceLocator,
    StaticServiceLocator,
)
from audit_client_lib.exceptions import RegistryLookupError
from audit_client_lib.replay_client import ReplayClient
from audit_client_lib.utils.http import HttpRequester

AUDIT_HOST = "http://localhost:11111"
EXPECTED_REPLAY_URI = AUDIT_HOST + "/audit/v1/replay"
EXPECTED_AUDIT_URI = AUDIT_HOST + "/audit/v1/audit"

STATUS_BODY = {
    "id": "some-id",
    "state": "RUNNING",
    "pathUri": "hdfs://some-path/",
    "sendRate": 100,
    "replayUnfinishedFiles": True,
    "lastUpdated": 1700000000000,
    "files": [
        {
            "path": "hdfs://some-path/audit.json",
            "state": "RUNNING",
            "linesRead": 10,
            "linesFailed": 1,
            "partialFile": False,
        }
    ],
}


def make_response(
    status: int = 200, body: bytes = b"", reason: str = "OK"
) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp._content = body
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """
    Stands in for ``requests.Session``: records prepared requests and answers
    with queued responses (``200 OK`` with an empty body by default).
    """

    def __init__(self) -> None:
        self.requests: List[requests.PreparedRequest] = []
        self.responses = deque()
        self.closed = False

    def respond_with(self, *responses) -> None:
        self.responses.extend(responses)

    def request(self, method, url, timeout=None, verify=None, **kwargs):
        prepared = requests.Request(method, url, **kwargs).prepare()
        self.requests.append(prepared)
        if not self.responses:
            return make_response()
        resp = self.responses.popleft()
        if isinstance(resp, Exception):
            raise resp
        return resp

    def close(self) -> None:
        self.closed = True

    @staticmethod
    def form(prepared: requests.PreparedRequest):
        body = prepared.body or ""
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return parse_qsl(body, keep_blank_values=True)


class CountingLocator(StaticServiceLocator):
    def __init__(self, uri: str, service_id: str) -> None:
        super().__init__(uri, service_id)
        self.calls = 0

    def resolve(self):
        self.calls += 1
        return super().resolve()


class FlakyLocator(ServiceLocator):
    """Fails the first ``failures`` lookups with ``error``, then resolves."""

    service_id = "audit"

    def __init__(self, failures, error=RegistryLookupError):
        self.failures = failures
        self.error = error
        self.calls = 0

    def resolve(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error(f"failure {self.calls}")
        return Endpoint(uri="http://audit-host:8443", service_id="audit")


@pytest.fixture
def identity():
    return CallerIdentity(
        principal="cn=test user, ou=my department, o=my company",
        issuer="cn=test ca",
        authorizations=("A", "B", "C", "D", "E", "F", "G", "H", "I"),
        roles=("AuthorizedUser",),
        token="test-token",
    )


@pytest.fixture
def marking():
    return SecurityMarking(column_visibility="BAR|FOO")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def locator():
    return CountingLocator(AUDIT_HOST + "/ignored/path", "audit")


@pytest.fixture
def http(session):
    return HttpRequester(timeout=5, session=session)


@pytest.fixture
def replay_client(locator, http):
    return ReplayClient(locator=locator, http=http)


@pytest.fixture
def audit_client(locator, http):
    return AuditClient(locator=locator, http=http)
