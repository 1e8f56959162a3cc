# tests/unit/test_clients.py

"""
Unit tests for the LambdaClient wrapper in src/hello_service/clients.py.

These tests ensure that the wrapper passes the expected arguments to the
underlying boto3 client and maps botocore failures onto the service's own
exception types.
"""

import io
import json
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError, ReadTimeoutError
from botocore.response import StreamingBody
from botocore.stub import ANY, Stubber

from hello_service.clients import LambdaClient
from hello_service.exceptions import (
    FunctionAccessDeniedError,
    FunctionExecutionError,
    FunctionNotFoundError,
    InvocationError,
    InvocationThrottledError,
    InvocationTimeoutError,
)


def _streaming(payload: bytes) -> StreamingBody:
    return StreamingBody(io.BytesIO(payload), len(payload))


# -----------------------------------------------------------------------------
# Fixtures for setting up clients with real and mock dependencies
# -----------------------------------------------------------------------------


@pytest.fixture
def boto_lambda_client():
    """A real boto3 Lambda client; every call is intercepted by a Stubber."""
    return boto3.client("lambda", region_name="eu-west-1")


@pytest.fixture
def stubber(boto_lambda_client):
    with Stubber(boto_lambda_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def lambda_client(boto_lambda_client) -> LambdaClient:
    return LambdaClient(boto_lambda_client)


# -----------------------------------------------------------------------------
# invoke_json
# -----------------------------------------------------------------------------


def test_invoke_json_returns_decoded_payload(stubber, lambda_client):
    proxy_response = {"statusCode": 200, "headers": {}, "body": "{}"}
    stubber.add_response(
        "invoke",
        {"StatusCode": 200, "Payload": _streaming(json.dumps(proxy_response).encode())},
        {"FunctionName": "hello-fn", "InvocationType": "RequestResponse", "Payload": ANY},
    )

    result = lambda_client.invoke_json("hello-fn", {"body": '{"x":1}'})

    assert result == proxy_response


def test_invoke_json_sends_json_payload():
    mock_boto = MagicMock()
    mock_boto.invoke.return_value = {"Payload": _streaming(b'{"ok": true}')}

    LambdaClient(mock_boto).invoke_json("hello-fn", {"body": "x"})

    kwargs = mock_boto.invoke.call_args.kwargs
    assert kwargs["FunctionName"] == "hello-fn"
    assert kwargs["InvocationType"] == "RequestResponse"
    assert json.loads(kwargs["Payload"]) == {"body": "x"}


def test_invoke_json_raises_on_function_error(stubber, lambda_client):
    error_payload = {"errorMessage": "boom", "errorType": "RuntimeError"}
    stubber.add_response(
        "invoke",
        {
            "StatusCode": 200,
            "FunctionError": "Unhandled",
            "Payload": _streaming(json.dumps(error_payload).encode()),
        },
    )

    with pytest.raises(FunctionExecutionError) as exc_info:
        lambda_client.invoke_json("hello-fn", {})

    assert exc_info.value.context["function_error"] == "Unhandled"
    assert exc_info.value.context["payload"] == error_payload


def test_invoke_json_rejects_non_object_payload(stubber, lambda_client):
    stubber.add_response("invoke", {"StatusCode": 200, "Payload": _streaming(b'"text"')})

    with pytest.raises(InvocationError) as exc_info:
        lambda_client.invoke_json("hello-fn", {})

    assert exc_info.value.error_code == "UNEXPECTED_PAYLOAD"


@pytest.mark.parametrize(
    "service_error_code, expected",
    [
        ("ResourceNotFoundException", FunctionNotFoundError),
        ("AccessDeniedException", FunctionAccessDeniedError),
        ("TooManyRequestsException", InvocationThrottledError),
        ("ServiceException", InvocationError),
    ],
)
def test_invoke_json_maps_client_errors(stubber, lambda_client, service_error_code, expected):
    stubber.add_client_error(
        "invoke", service_error_code=service_error_code, service_message="nope"
    )

    with pytest.raises(expected) as exc_info:
        lambda_client.invoke_json("hello-fn", {})

    assert exc_info.value.context["aws_error_code"] == service_error_code
    assert exc_info.value.context["function_name"] == "hello-fn"


@pytest.mark.parametrize(
    "side_effect",
    [
        ReadTimeoutError(endpoint_url="https://lambda.eu-west-1.amazonaws.com"),
        EndpointConnectionError(endpoint_url="https://lambda.eu-west-1.amazonaws.com"),
    ],
)
def test_invoke_json_maps_connection_failures_to_timeouts(side_effect):
    mock_boto = MagicMock()
    mock_boto.invoke.side_effect = side_effect

    with pytest.raises(InvocationTimeoutError) as exc_info:
        LambdaClient(mock_boto).invoke_json("hello-fn", {})

    assert exc_info.value.__cause__ is side_effect


# -----------------------------------------------------------------------------
# describe_function
# -----------------------------------------------------------------------------


def test_describe_function(stubber, lambda_client):
    stubber.add_response(
        "get_function_configuration",
        {"FunctionName": "hello-fn", "Runtime": "python3.12"},
        {"FunctionName": "hello-fn"},
    )

    result = lambda_client.describe_function("hello-fn")

    assert result["FunctionName"] == "hello-fn"
    assert result["Runtime"] == "python3.12"


def test_describe_function_not_found(stubber, lambda_client):
    stubber.add_client_error(
        "get_function_configuration", service_error_code="ResourceNotFoundException"
    )

    with pytest.raises(FunctionNotFoundError):
        lambda_client.describe_function("missing-fn")
