# tests/unit/test_bindings.py

import dataclasses
import json
from pathlib import Path

import pytest

from hello_service.bindings import (
    ApiBinding,
    CorsPolicy,
    FunctionBinding,
    default_api_binding,
)
from hello_service.exceptions import InvalidBindingError


def test_default_binding_exposes_get_on_root():
    binding = default_api_binding()

    assert binding.path == "/"
    assert binding.resource_path_parts == ()
    assert binding.methods == ("GET",)
    assert binding.rest_api_name == "Serverless Auth Service"
    assert binding.function.handler == "hello_service.app.handler"
    assert binding.cors.allow_origins == ("*",)
    assert "Content-Type" in binding.cors.allow_headers


def test_default_binding_injects_deployment_mode():
    binding = default_api_binding(environment="staging", log_level="DEBUG")

    assert binding.function.environment["ENVIRONMENT"] == "staging"
    assert binding.function.environment["LOG_LEVEL"] == "DEBUG"
    assert default_api_binding().function.environment["ENVIRONMENT"] == "production"


def test_binding_is_immutable():
    binding = default_api_binding()
    with pytest.raises(dataclasses.FrozenInstanceError):
        binding.path = "/other"


def test_resource_path_parts_for_nested_route():
    binding = ApiBinding(function=FunctionBinding(), path="/v1/hello/")
    assert binding.resource_path_parts == ("v1", "hello")


@pytest.mark.parametrize("path", ["hello", "", "/a//b"])
def test_invalid_paths_are_rejected(path):
    with pytest.raises(InvalidBindingError) as exc_info:
        ApiBinding(function=FunctionBinding(), path=path)
    assert exc_info.value.context["field"] == "path"


@pytest.mark.parametrize("methods", [(), ("get",), ("FETCH",), ("GET", "GET")])
def test_invalid_methods_are_rejected(methods):
    with pytest.raises(InvalidBindingError):
        ApiBinding(function=FunctionBinding(), methods=methods)


@pytest.mark.parametrize(
    "kwargs, field_name",
    [
        ({"handler": "handler"}, "function.handler"),
        ({"runtime": "nodejs20.x"}, "function.runtime"),
        ({"memory_size_mb": 64}, "function.memory_size_mb"),
        ({"timeout_seconds": 0}, "function.timeout_seconds"),
        ({"timeout_seconds": 901}, "function.timeout_seconds"),
    ],
)
def test_invalid_function_bindings_are_rejected(kwargs, field_name):
    with pytest.raises(InvalidBindingError) as exc_info:
        FunctionBinding(**kwargs)
    assert exc_info.value.context["field"] == field_name


@pytest.mark.parametrize(
    "kwargs",
    [{"allow_origins": ()}, {"allow_origins": ("",)}, {"allow_methods": ("TRACE",)}],
)
def test_invalid_cors_policies_are_rejected(kwargs):
    with pytest.raises(InvalidBindingError):
        CorsPolicy(**kwargs)


def test_cdk_app_command_puts_src_on_path():
    """`cdk synth` runs from the repo root, so the app must find `hello_service` under src/."""
    cdk_json = Path(__file__).resolve().parents[2] / "cdk.json"
    command = json.loads(cdk_json.read_text())["app"]

    assert "PYTHONPATH=src" in command
    assert command.endswith("infrastructure/app.py")
