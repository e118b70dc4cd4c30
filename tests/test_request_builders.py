import pytest

from audit_client_lib.data_models.audit import AuditRequest, AuditType
from audit_client_lib.data_models.params import ParameterMap
from audit_client_lib.data_models.replay import ReplayRequest


def test_replay_builder_omits_unset_fields(identity):
    request = ReplayRequest.Builder().with_caller_identity(identity).build()

    assert request.params is None
    assert request.target_id is None
    assert request.caller_identity is identity


def test_replay_builder_serialises_fields(identity):
    request = (
        ReplayRequest.Builder()
        .with_caller_identity(identity)
        .with_replay_unfinished_files(False)
        .with_send_rate(250)
        .with_path_uri("hdfs://some-path/")
        .with_id("some-id")
        .build()
    )

    assert request.target_id == "some-id"
    assert request.params.to_dict() == {
        "pathUri": ["hdfs://some-path/"],
        "sendRate": ["250"],
        "replayUnfinishedFiles": ["false"],
    }


def test_request_is_immutable(identity):
    request = ReplayRequest.Builder().with_caller_identity(identity).with_id("a").build()

    with pytest.raises(AttributeError):
        request.target_id = "b"
    with pytest.raises(AttributeError):
        request._target_id = "b"
    with pytest.raises(TypeError):
        request.params["x"] = ("y",)


def test_builder_can_be_reused_without_affecting_built_request(identity):
    builder = ReplayRequest.Builder().with_caller_identity(identity).with_send_rate(1)
    first = builder.build()
    second = builder.with_send_rate(2).build()

    assert first.params.get_first("sendRate") == "1"
    assert second.params.get_first("sendRate") == "2"


def test_parameter_map_keeps_order_and_repeats():
    params = ParameterMap([("b", "1"), ("a", ["2", "3"]), ("b", "4"), ("empty", [])])

    assert list(params) == ["b", "a"]
    assert params["b"] == ("1", "4")
    assert "empty" not in params
    assert params.form_items() == [("b", "1"), ("b", "4"), ("a", "2"), ("a", "3")]


def test_audit_builder_merges_params(identity, marking):
    request = (
        AuditRequest.Builder()
        .with_params({"PARAM1": ["v1", "v2"], "query": "overridden"})
        .with_query_expression("FIELD:VALUE")
        .with_caller_identity(identity)
        .with_marking(marking)
        .with_audit_type(AuditType.ACTIVE)
        .with_query_logic("QueryLogic")
        .build()
    )

    assert request.params["PARAM1"] == ("v1", "v2")
    assert request.params["query"] == ("FIELD:VALUE",)
    assert request.params["auditType"] == ("ACTIVE",)
    assert list(request.params)[0] == "PARAM1"


def test_audit_builder_never_validates():
    request = AuditRequest.Builder().build()

    assert request.params is None
    assert request.caller_identity is None
