import pytest
import requests

from audit_client_lib.data_models.replay import ReplayRequest
from audit_client_lib.discovery.locator import RetryingServiceLocator, retry_policy
from audit_client_lib.exceptions import ServiceUnavailable, TransportError
from audit_client_lib.replay_client import ReplayClient
from audit_client_lib.services.operations import (
    AuditOperation,
    ReplayOperation,
    ResponseShape,
)
from audit_client_lib.utils.http import HttpRequester

from conftest import FlakyLocator, make_response


def test_operation_table_is_complete():
    names = {op.descriptor.name for op in ReplayOperation}

    assert len(names) == 14
    assert {"create", "createAndStart", "statusAll", "deleteAll"} <= names
    assert ReplayOperation.STATUS.descriptor.response_shape is ResponseShape.STATUS
    assert ReplayOperation.STATUS_ALL.descriptor.response_shape is ResponseShape.STATUS_LIST
    assert AuditOperation.SUBMIT.descriptor.path() == "/v1/audit"
    assert ReplayOperation.START.descriptor.path("abc") == "/v1/replay/abc/start"
    assert ReplayOperation.START_ALL.descriptor.path("abc") == "/v1/replay/startAll"


def test_target_id_is_quoted_into_one_segment():
    descriptor = ReplayOperation.STOP.descriptor

    assert descriptor.path("a/../../x") == "/v1/replay/a%2F..%2F..%2Fx/stop"
    assert descriptor.path("50%") == "/v1/replay/50%25/stop"


def test_network_failure_raises_transport_error(replay_client, session, identity):
    session.respond_with(requests.ConnectionError("connection refused"))
    request = ReplayRequest.Builder().with_caller_identity(identity).build()

    with pytest.raises(TransportError) as exc_info:
        replay_client.start_all(request)

    assert exc_info.value.operation == "startAll"
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_malformed_status_raises_transport_error(replay_client, session, identity):
    session.respond_with(make_response(body=b"<html>oops</html>"))
    request = ReplayRequest.Builder().with_caller_identity(identity).with_id("x").build()

    with pytest.raises(TransportError):
        replay_client.status(request)


def test_status_record_missing_id_raises_transport_error(replay_client, session, identity):
    session.respond_with(make_response(body=b'[{"state": "RUNNING"}]'))
    request = ReplayRequest.Builder().with_caller_identity(identity).build()

    with pytest.raises(TransportError):
        replay_client.status_all(request)


def test_locator_failure_prevents_call(session, identity):
    locator = RetryingServiceLocator(
        FlakyLocator(failures=5), retry=retry_policy(2, backoff_factor=0)
    )
    client = ReplayClient(locator=locator, http=HttpRequester(session=session))
    request = ReplayRequest.Builder().with_caller_identity(identity).build()

    with pytest.raises(ServiceUnavailable):
        client.start_all(request)

    assert session.requests == []


def test_identity_without_token_sends_principal_only(replay_client, session, identity):
    anonymous = identity.model_copy(update={"token": None})
    request = ReplayRequest.Builder().with_caller_identity(anonymous).build()

    replay_client.resume_all(request)

    sent = session.requests[0]
    assert "Authorization" not in sent.headers
    assert sent.headers["X-Principal-DN"] == identity.principal


def test_http_requester_closes_session(session):
    http = HttpRequester(session=session)
    http.close()

    assert session.closed


def test_http_requester_default_session_has_no_retries():
    http = HttpRequester(timeout=3)

    adapter = http.session.get_adapter("https://audit:8443")
    assert adapter.max_retries.total == 0
    assert http.timeout == 3
