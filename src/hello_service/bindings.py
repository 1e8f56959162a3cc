# src/hello_service/bindings.py

"""
Static description of how the handler is exposed over HTTP.

Nothing here runs inside the Lambda function. The dataclasses below are plain
configuration data consumed by the deployment tool in `infrastructure/`, which
turns them into CDK constructs.
"""

from dataclasses import dataclass, field
from typing import Mapping

from .exceptions import InvalidBindingError

HTTP_METHODS = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "ANY"}
)

DEFAULT_ALLOW_HEADERS = (
    "Content-Type",
    "Authorization",
    "X-Amz-Date",
    "X-Api-Key",
    "X-Amz-Security-Token",
)


def _check_methods(field_name: str, methods: tuple[str, ...]) -> None:
    if not methods:
        raise InvalidBindingError(field_name, methods)
    for method in methods:
        if method not in HTTP_METHODS:
            raise InvalidBindingError(field_name, method)


@dataclass(frozen=True, slots=True)
class CorsPolicy:
    """Cross-origin policy applied to the API and its preflight responses."""

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "OPTIONS")
    allow_headers: tuple[str, ...] = DEFAULT_ALLOW_HEADERS

    def __post_init__(self):
        if not self.allow_origins or any(not o for o in self.allow_origins):
            raise InvalidBindingError("cors.allow_origins", self.allow_origins)
        _check_methods("cors.allow_methods", self.allow_methods)


@dataclass(frozen=True, slots=True)
class FunctionBinding:
    """The Lambda function the API forwards requests to."""

    construct_id: str = "HelloHandler"
    handler: str = "hello_service.app.handler"
    runtime: str = "python3.12"
    code_path: str = "src"
    memory_size_mb: int = 128
    timeout_seconds: int = 10
    environment: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        module, _, func = self.handler.rpartition(".")
        if not module or not func:
            raise InvalidBindingError("function.handler", self.handler)
        if not self.runtime.startswith("python3."):
            raise InvalidBindingError("function.runtime", self.runtime)
        if not 128 <= self.memory_size_mb <= 10_240:
            raise InvalidBindingError("function.memory_size_mb", self.memory_size_mb)
        if not 1 <= self.timeout_seconds <= 900:
            raise InvalidBindingError("function.timeout_seconds", self.timeout_seconds)


@dataclass(frozen=True, slots=True)
class ApiBinding:
    """A REST API route bound to a single Lambda integration."""

    function: FunctionBinding
    construct_id: str = "HelloApi"
    rest_api_name: str = "Serverless Auth Service"
    description: str = "API Gateway for Serverless Auth Service"
    path: str = "/"
    methods: tuple[str, ...] = ("GET",)
    cors: CorsPolicy = field(default_factory=CorsPolicy)

    def __post_init__(self):
        if not self.path.startswith("/") or "//" in self.path:
            raise InvalidBindingError("path", self.path)
        _check_methods("methods", self.methods)
        if len(set(self.methods)) != len(self.methods):
            raise InvalidBindingError("methods", self.methods)

    @property
    def resource_path_parts(self) -> tuple[str, ...]:
        """Path segments below the API root; empty for the root route."""
        return tuple(part for part in self.path.split("/") if part)


def default_api_binding(
    environment: str = "production", log_level: str = "INFO"
) -> ApiBinding:
    """
    The binding that is actually deployed: GET on the API root, forwarded to
    the greeting handler, with permissive CORS.
    """
    function = FunctionBinding(
        environment={
            "ENVIRONMENT": environment,
            "LOG_LEVEL": log_level,
            "SERVICE_NAME": "hello-service",
            "POWERTOOLS_SERVICE_NAME": "hello-service",
        }
    )
    return ApiBinding(function=function)
