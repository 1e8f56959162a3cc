# src/hello_service/core.py

"""
Core request/response logic for the Hello Service.

Everything in this module is a pure transformation: the platform request id
and the clock reading are passed in explicitly, nothing is read from global
state, and nothing is shared between invocations. The Lambda adapter in
`app.py` is the only caller that touches Powertools or the invocation context.
"""

import base64
import binascii
import json
import logging
import math
from datetime import datetime, timezone
from typing import Any

from .exceptions import MalformedRequestBodyError, RequestError
from .schemas import (
    ApiGatewayRequest,
    ErrorDetail,
    ErrorPayload,
    GreetingPayload,
    ProxyResponse,
)

logger = logging.getLogger(__name__)

GREETING_MESSAGE = "Hello, World!"

RESPONSE_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

_JSON_SEPARATORS = (",", ":")


# --- Helpers ---
def utc_timestamp(now: datetime | None = None) -> str:
    """
    Render *now* (default: the current time) as an ISO-8601 UTC string with
    millisecond precision and a trailing 'Z', e.g. 2026-10-18T09:30:00.123Z.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def decode_event_body(request: ApiGatewayRequest) -> str | None:
    """Returns the body as text, base64-decoding it when API Gateway flagged it."""
    if not request.body or not request.is_base64_encoded:
        return request.body

    try:
        return base64.b64decode(request.body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedRequestBodyError(
            "flagged as base64 but could not be decoded to UTF-8 text",
            context={"decode_error": type(e).__name__},
        ) from e


def _reject_constant(name: str) -> Any:
    raise MalformedRequestBodyError(
        f"not valid JSON ({name} is not a JSON value)", context={"constant": name}
    )


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise MalformedRequestBodyError(
            f"number {text} is out of range", context={"number": text}
        )
    return value


def parse_request_body(raw_body: str | None) -> Any:
    """
    Parse the raw request body. An absent or empty body yields an empty mapping;
    any other text must be a valid JSON document of any type.

    NaN/Infinity literals and numbers that overflow a float are rejected, so
    whatever is accepted can be written back out as strict JSON.
    """
    if not raw_body:
        return {}

    try:
        return json.loads(
            raw_body, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except json.JSONDecodeError as e:
        raise MalformedRequestBodyError(
            f"not valid JSON ({e.msg})", context={"line": e.lineno, "column": e.colno}
        ) from e


def _json_response(status_code: int, payload: dict[str, Any]) -> ProxyResponse:
    return {
        "statusCode": status_code,
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(payload, separators=_JSON_SEPARATORS, allow_nan=False),
    }


# --- Response Builders ---
def build_greeting_response(
    request: ApiGatewayRequest,
    request_id: str,
    now: datetime | None = None,
) -> ProxyResponse:
    """
    Builds the 200 greeting response for a single invocation.

    Args:
        request: The validated API Gateway event.
        request_id: The platform-supplied request id, echoed back verbatim.
        now: Optional clock reading; defaults to the current UTC time.

    Raises:
        MalformedRequestBodyError: If the body is present but not valid JSON.
    """
    received_body = parse_request_body(decode_event_body(request))

    payload = GreetingPayload(
        message=GREETING_MESSAGE,
        timestamp=utc_timestamp(now),
        request_id=request_id,
        body=received_body,
    )
    logger.debug("Greeting payload built", extra={"request_id": request_id})
    return _json_response(200, payload.model_dump(by_alias=True))


def build_error_response(error: RequestError, request_id: str) -> ProxyResponse:
    """Builds the structured 4xx response for a rejected request."""
    payload = ErrorPayload(
        error=ErrorDetail(
            code=error.error_code,
            message=error.message,
            request_id=request_id,
        )
    )
    return _json_response(error.status_code, payload.model_dump(by_alias=True))
