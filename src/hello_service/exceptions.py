# src/hello_service/exceptions.py

"""
Shared custom exceptions for the Hello Service.

Centralizing exception definitions in a separate module prevents circular
import errors between other modules that need to raise or catch them.

Exception Hierarchy:
- HelloServiceError (base)
  - RetryableError (can be retried)
    - InvocationThrottledError
    - InvocationTimeoutError
  - NonRetryableError (should not be retried)
    - RequestError (rejected inbound request, carries an HTTP status)
      - MalformedRequestBodyError
      - InvalidRequestEventError
    - ValidationError
      - InvalidBindingError
    - ConfigurationError
    - FunctionNotFoundError
    - FunctionAccessDeniedError
    - FunctionExecutionError
"""

from typing import Any, Dict, Optional


class HelloServiceError(Exception):
    """Base exception for all Hello Service errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = dict(context) if context else {}
        self.correlation_id = correlation_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "correlation_id": self.correlation_id,
            "retryable": isinstance(self, RetryableError),
        }


class RetryableError(HelloServiceError):
    """Base class for errors that can be retried."""

    pass


class NonRetryableError(HelloServiceError):
    """Base class for errors that should not be retried."""

    pass


# === Request Errors ===


class RequestError(NonRetryableError):
    """Base class for inbound requests the handler rejects with a 4xx response."""

    status_code: int = 400


class MalformedRequestBodyError(RequestError):
    """Raised when the request body cannot be decoded or is not valid JSON."""

    def __init__(self, reason: str, **kwargs):
        message = f"Malformed request body: {reason}"
        context = {"reason": reason}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        super().__init__(
            message, error_code="MALFORMED_REQUEST_BODY", context=context, **kwargs
        )


class InvalidRequestEventError(RequestError):
    """Raised when the invocation event is not a usable API Gateway proxy event."""

    def __init__(self, message: str, **kwargs):
        if "error_code" not in kwargs:
            kwargs["error_code"] = "INVALID_REQUEST_EVENT"
        super().__init__(message, **kwargs)


# === Validation Errors ===


class ValidationError(NonRetryableError):
    """Base class for validation errors."""

    pass


class InvalidBindingError(ValidationError):
    """Raised when an API binding description is invalid."""

    def __init__(self, field_name: str, value: Any = None, **kwargs):
        message = f"Invalid API binding: {field_name}"
        context = {
            "field": field_name,
            "value": str(value) if value is not None else None,
        }
        super().__init__(
            message, error_code="INVALID_BINDING", context=context, **kwargs
        )


# === Configuration Errors ===


class ConfigurationError(NonRetryableError):
    """Raised when there's an error in the application configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)


# === Lambda Invocation Errors ===


class InvocationError(HelloServiceError):
    """Base class for errors raised while invoking a deployed function."""

    pass


class FunctionNotFoundError(InvocationError, NonRetryableError):
    """Raised when the target Lambda function does not exist."""

    def __init__(self, function_name: str, **kwargs):
        message = f"Lambda function not found: {function_name}"
        context = {"function_name": function_name}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        super().__init__(
            message, error_code="FUNCTION_NOT_FOUND", context=context, **kwargs
        )


class FunctionAccessDeniedError(InvocationError, NonRetryableError):
    """Raised when the caller is not allowed to invoke the function."""

    def __init__(self, function_name: str, **kwargs):
        message = f"Access denied to Lambda function: {function_name}"
        context = {"function_name": function_name}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        super().__init__(
            message, error_code="FUNCTION_ACCESS_DENIED", context=context, **kwargs
        )


class FunctionExecutionError(InvocationError, NonRetryableError):
    """Raised when the function ran but reported an unhandled error."""

    def __init__(self, function_name: str, function_error: str, **kwargs):
        message = f"Lambda function {function_name} failed: {function_error}"
        context = {"function_name": function_name, "function_error": function_error}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        super().__init__(
            message, error_code="FUNCTION_EXECUTION_FAILED", context=context, **kwargs
        )


class InvocationThrottledError(InvocationError, RetryableError):
    """Raised when Lambda invocations are being throttled."""

    def __init__(self, function_name: str, **kwargs):
        message = f"Lambda invocation throttled: {function_name}"
        context = {"function_name": function_name}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        super().__init__(
            message, error_code="INVOCATION_THROTTLED", context=context, **kwargs
        )


class InvocationTimeoutError(InvocationError, RetryableError):
    """Raised when a Lambda invocation times out or cannot reach the endpoint."""

    def __init__(self, function_name: str, reason: str, **kwargs):
        message = f"Lambda invocation timed out: {function_name} ({reason})"
        context = {}
        if "context" in kwargs:
            context.update(kwargs.pop("context"))
        context.update({"function_name": function_name, "reason": reason})
        super().__init__(
            message, error_code="INVOCATION_TIMEOUT", context=context, **kwargs
        )


# === Utility Functions ===


def is_retryable_error(error: Exception) -> bool:
    """Check if an error is retryable."""
    return isinstance(error, RetryableError)


def get_error_context(error: Exception) -> Dict[str, Any]:
    """Extract error context for logging."""
    if isinstance(error, HelloServiceError):
        return error.to_dict()
    else:
        return {
            "error_type": error.__class__.__name__,
            "message": str(error),
            "retryable": False,  # Unknown errors default to non-retryable
        }
