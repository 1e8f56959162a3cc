"""
Shared fixtures for unit tests.
"""

from __future__ import annotations

import json
import os
import uuid
from unittest.mock import MagicMock

import pytest

# The handler module builds its Powertools objects at import time, so these
# have to be in place before any test module imports it.
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "HelloServiceTest")
os.environ.setdefault("SERVICE_NAME", "hello-service-test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")


@pytest.fixture(scope="session", autouse=True)
def _env_vars():
    """
    Ensures a deterministic environment for every test run.
    Overwrite *only* the variables needed by the handler.
    """
    original = os.environ.copy()
    os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "hello-service-test")
    os.environ.setdefault("POWERTOOLS_LOG_LEVEL", "INFO")
    yield
    os.environ.clear()
    os.environ.update(original)


# ---------- Minimal, realistic dummy events ---------- #
@pytest.fixture
def api_gateway_event() -> dict:
    """A REST API (v1) proxy event for GET / carrying a small JSON body."""
    return {
        "resource": "/",
        "path": "/",
        "httpMethod": "GET",
        "headers": {"Content-Type": "application/json", "Host": "example.com"},
        "multiValueHeaders": {},
        "queryStringParameters": None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "resourcePath": "/",
            "httpMethod": "GET",
            "stage": "prod",
            "requestId": str(uuid.uuid4()),
        },
        "body": json.dumps({"x": 1}),
        "isBase64Encoded": False,
    }


@pytest.fixture
def lambda_context() -> MagicMock:
    """A small stand-in for the LambdaContext object."""
    context = MagicMock()
    context.function_name = "hello-handler"
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = (
        "arn:aws:lambda:eu-west-1:000000000000:function:hello-handler"
    )
    context.aws_request_id = "req-" + uuid.uuid4().hex
    context.get_remaining_time_in_millis.return_value = 10_000
    return context
