from __future__ import annotations

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from common.errors import StoreError
from common.ssm_store import SECURE_STRING, ParameterPage, ParameterStore

from fakes import FakeSSM, make_params


def test_first_fetch_omits_next_token():
    ssm = FakeSSM([make_params(["/app/a"])])
    store = ParameterStore(ssm=ssm)

    page = store.fetch_page("/app/", recursive=True, with_decryption=True)

    assert ssm.fetch_calls == [{"Path": "/app/", "Recursive": True, "WithDecryption": True}]
    assert [p.name for p in page.parameters] == ["/app/a"]
    assert page.parameters[0].value == "value-of-/app/a"
    assert page.parameters[0].type == "String"
    assert page.next_token is None


def test_fetch_passes_token_through_unchanged():
    ssm = FakeSSM([make_params(["/app/a"]), make_params(["/app/b"])])
    store = ParameterStore(ssm=ssm)

    first = store.fetch_page("/app/")
    assert first.next_token == "T1"

    second = store.fetch_page("/app/", next_token=first.next_token)
    assert ssm.fetch_calls[1]["NextToken"] == "T1"
    assert [p.name for p in second.parameters] == ["/app/b"]


def test_page_model_normalizes_blank_token_and_missing_value():
    page = ParameterPage.model_validate(
        {"Parameters": [{"Name": "/x", "Type": "SecureString"}], "NextToken": ""}
    )
    assert page.next_token is None
    assert page.parameters[0].value is None


def test_page_model_defaults_when_parameters_absent():
    page = ParameterPage.model_validate({})
    assert page.parameters == []
    assert page.next_token is None


def test_fetch_client_error_becomes_store_error():
    class _DeniedSSM:
        def get_parameters_by_path(self, **_kwargs):
            raise ClientError({"Error": {"Code": "AccessDeniedException"}}, "GetParametersByPath")

    store = ParameterStore(ssm=_DeniedSSM())
    with pytest.raises(StoreError) as ei:
        store.fetch_page("/app/")
    assert ei.value.code == "AccessDeniedException"
    assert ei.value.operation == "GetParametersByPath"
    assert isinstance(ei.value.__cause__, ClientError)


def test_fetch_transport_error_becomes_store_error():
    class _OfflineSSM:
        def get_parameters_by_path(self, **_kwargs):
            raise EndpointConnectionError(endpoint_url="https://ssm.us-east-1.amazonaws.com")

    store = ParameterStore(ssm=_OfflineSSM())
    with pytest.raises(StoreError) as ei:
        store.fetch_page("/app/")
    assert ei.value.code is None


def test_fetch_malformed_response_raises_store_error():
    class _WeirdSSM:
        def get_parameters_by_path(self, **_kwargs):
            return {"Parameters": [{"Value": "no name or type"}]}

    store = ParameterStore(ssm=_WeirdSSM())
    with pytest.raises(StoreError):
        store.fetch_page("/app/")


def test_write_parameter_sends_securestring_overwrite():
    ssm = FakeSSM([[]])
    store = ParameterStore(ssm=ssm)

    version = store.write_parameter("/app/a", "s3cr3t")

    assert version == 2
    assert ssm.put_calls == [
        {"Name": "/app/a", "Value": "s3cr3t", "Type": SECURE_STRING, "Overwrite": True}
    ]


def test_write_parameter_failure_raises_store_error():
    ssm = FakeSSM([[]], fail_put_on="/app/a")
    store = ParameterStore(ssm=ssm)

    with pytest.raises(StoreError) as ei:
        store.write_parameter("/app/a", "v")
    assert ei.value.code == "ThrottlingException"
    assert ei.value.operation == "PutParameter"


def test_invalid_region_raises_store_error():
    with pytest.raises(StoreError) as ei:
        ParameterStore(region_name="us east 1")
    assert ei.value.operation == "CreateClient"
