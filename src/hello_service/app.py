"""
The Lambda Adapter for the Hello Service.

This module is the main entry point for the AWS Lambda function. It is
responsible for:
1.  Initializing and configuring AWS Lambda Powertools (Logger, Tracer, Metrics).
2.  Logging the incoming API Gateway event for diagnostics.
3.  Validating the event and handing it, together with the platform request id,
    to the pure response builders in `core`.
4.  Turning rejected requests into structured 400 responses instead of letting
    them surface as platform faults.
"""

import json
from typing import Any

import pydantic
from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from .config import get_config
from .core import build_error_response, build_greeting_response
from .exceptions import InvalidRequestEventError, RequestError, get_error_context
from .schemas import ApiGatewayRequest, ProxyResponse

# --- Global & Reusable Components ---
CONFIG = get_config()

logger = Logger(service=CONFIG.service_name, level=CONFIG.log_level)
tracer = Tracer(service=CONFIG.service_name)
metrics = Metrics(
    namespace=CONFIG.metrics_namespace,
    service=CONFIG.service_name,
)


def _loggable_event(event: Any, limit_bytes: int) -> Any:
    """Returns the event itself, or its serialized prefix when it is too large to log."""
    serialized = json.dumps(event, default=str)
    if len(serialized.encode("utf-8")) <= limit_bytes:
        return event
    return serialized.encode("utf-8")[:limit_bytes].decode("utf-8", errors="ignore")


def _reject(error: RequestError, request_id: str) -> ProxyResponse:
    metrics.add_metric(name="RejectedRequests", unit=MetricUnit.Count, value=1)
    logger.warning(f"Rejected request: {error}", extra=get_error_context(error))
    return build_error_response(error, request_id)


@logger.inject_lambda_context()
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event: dict, context: LambdaContext) -> ProxyResponse:
    """Main Lambda handler for API Gateway proxy events and direct invocations."""
    metrics.add_dimension("environment", CONFIG.environment)
    request_id = context.aws_request_id
    tracer.put_annotation(key="RequestId", value=request_id)

    if CONFIG.log_event:
        logger.info(
            "Received event",
            extra={"event": _loggable_event(event, CONFIG.max_logged_event_bytes)},
        )

    try:
        request = ApiGatewayRequest.model_validate(event)
    except pydantic.ValidationError as e:
        error = InvalidRequestEventError(
            "Invocation event is not a valid API Gateway proxy event",
            context={"validation_errors": e.errors(include_url=False)},
            correlation_id=request_id,
        )
        return _reject(error, request_id)

    try:
        response = build_greeting_response(request, request_id=request_id)
    except RequestError as e:
        e.correlation_id = request_id
        return _reject(e, request_id)

    metrics.add_metric(name="GreetingsServed", unit=MetricUnit.Count, value=1)
    logger.debug(
        "Greeting response built",
        extra={"http_method": request.http_method, "path": request.path},
    )
    return response
