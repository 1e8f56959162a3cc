# src/hello_service/clients.py

"""
Client wrapper for invoking the deployed Hello Service function.

The wrapper keeps boto3 details (payload streams, error codes, connection
failures) out of the calling code and maps them onto the service's own
exception taxonomy.
"""

import json
import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError, EndpointConnectionError, ReadTimeoutError

from .exceptions import (
    FunctionAccessDeniedError,
    FunctionExecutionError,
    FunctionNotFoundError,
    InvocationError,
    InvocationThrottledError,
    InvocationTimeoutError,
)

if TYPE_CHECKING:
    from mypy_boto3_lambda.client import LambdaClient as LambdaClientType

logger = logging.getLogger(__name__)

_THROTTLING_CODES = {
    "TooManyRequestsException",
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
}
_ACCESS_DENIED_CODES = {"AccessDeniedException", "AccessDenied"}


class LambdaClient:
    """
    A wrapper for the Lambda operations the smoke tests need.
    """

    def __init__(self, lambda_client: "LambdaClientType"):
        """
        Initializes the LambdaClient.

        Args:
            lambda_client: A typed boto3 Lambda client.
        """
        self._client = lambda_client

    def _map_client_error(self, e: ClientError, function_name: str) -> InvocationError:
        error_code = e.response["Error"]["Code"]
        error_message = e.response["Error"].get("Message", "")
        context = {"aws_error_code": error_code, "aws_error_message": error_message}

        if error_code == "ResourceNotFoundException":
            return FunctionNotFoundError(function_name, context=context)
        if error_code in _ACCESS_DENIED_CODES:
            return FunctionAccessDeniedError(function_name, context=context)
        if error_code in _THROTTLING_CODES:
            return InvocationThrottledError(function_name, context=context)
        return InvocationError(
            f"Lambda client error: {error_message}",
            error_code="LAMBDA_CLIENT_ERROR",
            context={"function_name": function_name, **context},
        )

    def invoke_json(self, function_name: str, payload: Any) -> dict[str, Any]:
        """
        Synchronously invokes *function_name* with a JSON payload and returns
        the decoded JSON result.

        Raises:
            FunctionExecutionError: If the function reported an unhandled error.
            InvocationError: For any failure to reach or call the function.
        """
        logger.debug("Invoking function", extra={"function_name": function_name})
        try:
            response = self._client.invoke(
                FunctionName=function_name,
                InvocationType="RequestResponse",
                Payload=json.dumps(payload).encode("utf-8"),
            )
        except ClientError as e:
            raise self._map_client_error(e, function_name) from e
        except ReadTimeoutError as e:
            raise InvocationTimeoutError(function_name, "read timeout") from e
        except EndpointConnectionError as e:
            raise InvocationTimeoutError(
                function_name,
                "endpoint connection error",
                context={"connection_error": str(e)},
            ) from e

        raw = response["Payload"].read()
        try:
            result = json.loads(raw) if raw else None
        except json.JSONDecodeError:
            result = raw.decode("utf-8", errors="replace")

        function_error = response.get("FunctionError")
        if function_error:
            raise FunctionExecutionError(
                function_name,
                function_error,
                context={"payload": result},
            )

        if not isinstance(result, dict):
            raise InvocationError(
                "Function returned a non-object payload",
                error_code="UNEXPECTED_PAYLOAD",
                context={"function_name": function_name, "payload": result},
            )
        return result

    def describe_function(self, function_name: str) -> dict[str, Any]:
        """Returns the function configuration; used to confirm access before invoking."""
        try:
            response = self._client.get_function_configuration(
                FunctionName=function_name
            )
        except ClientError as e:
            raise self._map_client_error(e, function_name) from e
        except EndpointConnectionError as e:
            raise InvocationTimeoutError(
                function_name,
                "endpoint connection error",
                context={"connection_error": str(e)},
            ) from e
        return dict(response)
